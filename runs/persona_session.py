"""
Persona Session: send one message to several personas and print the replies.

This script demonstrates:
1. Intent classification - the message decides rewrite, feedback or chat
2. Remote generation - composed prompts sent through LiteLLM when a key is set
3. Local fallback - rule-based rewrites and templated feedback otherwise

USAGE:
    1. Set configuration parameters below (settings file, message, personas)
    2. Optionally export OPENAI_API_KEY (without it every reply is local)
    3. Run: python runs/persona_session.py
"""
import asyncio
from pathlib import Path

from scrivener import build_orchestrator, load_config, setup_logging
from scrivener.remote import LLMRemoteGenerator


# ============================================================================
# CONFIGURATION - Modify these parameters before running
# ============================================================================

# Settings file (YAML); environment variables override its values
SETTINGS_PATH = Path(__file__).parent.parent / "scrivener.yaml"

# Personas answering when the message has no @mentions
SELECTED_PERSONAS = ["sophia", "marcus", "luna"]

# Try also:
# MESSAGE = "What do you think of this: The meeting ran long and nobody decided anything."
# MESSAGE = "@ProfessorChen how should I structure a literature review?"
MESSAGE = "rewrite this to be more professional: hey whats up, I think the report is kind of done"

# Text under discussion, quoted in conversational prompts
DOCUMENT_TEXT = None

# Probe the remote model before sending
CHECK_CONNECTION = True


# ============================================================================
# MAIN
# ============================================================================

async def session(orchestrator):
    print(f"\n>>> {MESSAGE}\n")
    results = await orchestrator.respond_to(MESSAGE, SELECTED_PERSONAS, document_text=DOCUMENT_TEXT)

    for result in results:
        name = orchestrator.registry[result.persona_id].name if result.persona_id in orchestrator.registry else result.persona_id
        origin = result.origin.value if result.origin else "error"
        print("=" * 80)
        print(f"{name} [{result.response_type.value}, {origin}]")
        print("-" * 80)
        print(result.text)
        print()


def main():
    config = load_config(SETTINGS_PATH if SETTINGS_PATH.exists() else None)
    setup_logging(config.log_level)
    orchestrator = build_orchestrator(config)

    if CHECK_CONNECTION and isinstance(orchestrator.generator, LLMRemoteGenerator):
        status = orchestrator.generator.check_connection()
        print(f"Remote: {status.message}" + (f" ({status.model})" if status.model else ""))
    elif orchestrator.generator is None:
        print("Remote: not configured, replies come from the local fallback")

    asyncio.run(session(orchestrator))


if __name__ == "__main__":
    main()
