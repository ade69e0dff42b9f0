"""
Run the Academic Tutor Agent REST API.

Usage:
    python run_api.py

Environment variables (all optional):
    LLM_PROVIDER        "openai", "groq", or "ollama" (default: openai)
    OPENAI_API_KEY      Required when LLM_PROVIDER=openai
    GROQ_API_KEY        Required when LLM_PROVIDER=groq
    OLLAMA_BASE_URL     Ollama server URL (default: http://localhost:11434/)
    JWT_SECRET          Secret key for verifying bearer tokens (change in production!)
    DB_PATH             SQLite database file path (default: tutor.db)
    LOG_LEVEL           Logging level (default: INFO)
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "adapters.rest.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
