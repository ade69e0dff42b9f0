"""
Run the Academic Tutor Agent CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    chat           Interactive tutor session
    conversations  List your conversations
    show           Print a conversation's messages
    delete         Delete a conversation
    init-db        Create the database schema
    add-user       Add a user to the local directory
    token          Issue a bearer token for the REST API

Examples:
    python run_cli.py init-db
    python run_cli.py add-user ana Ana Torres --career "Systems Engineering"
    python run_cli.py chat --user ana

Environment variables (all optional):
    LLM_PROVIDER        "openai", "groq", or "ollama" (default: openai)
    LLM_MODEL_OPENAI    Model name when LLM_PROVIDER=openai (default: gpt-4.1-mini)
    LLM_MODEL_GROQ      Model name when LLM_PROVIDER=groq (default: llama-3.3-70b-versatile)
    LLM_MODEL_OLLAMA    Model name when LLM_PROVIDER=ollama (default: llama3.2)
    OPENAI_API_KEY      Required when LLM_PROVIDER=openai
    GROQ_API_KEY        Required when LLM_PROVIDER=groq
    TUTOR_USER_ID       Default acting user for --user
    DB_PATH             SQLite database file path (default: tutor.db)
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app

if __name__ == "__main__":
    app()
