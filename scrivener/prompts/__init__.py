from scrivener.prompts.prompt_models import (
    BasePromptConfig,
    PersonaPromptConfig,
    # System prompts
    RewriteSystemConfig,
    FeedbackSystemConfig,
    ConversationSystemConfig,
    # User prompts
    RewriteUserConfig,
    FeedbackUserConfig,
    ConversationUserConfig,
)
