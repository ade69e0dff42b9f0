"""
adapters - Outer surfaces (REST, CLI) over the ServiceFactory.
"""
