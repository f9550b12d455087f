"""
Domain and API schemas (pydantic).
"""
