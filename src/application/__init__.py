"""
application - Use-case services: conversation store, rate limiting, audit.

Depends on domain/ only. Never imports from infrastructure/ or agent/.
"""
