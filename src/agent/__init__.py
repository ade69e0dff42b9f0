"""
agent - Conversational agent orchestration layer.

Contains tools, the dispatcher, the system prompt, and the orchestrator
that runs the bounded model + tool loop.
Depends on domain/ and application/. Never imports from infrastructure/.
"""
