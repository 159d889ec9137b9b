"""
LLM agents for Global Gourmet Scout.

Each agent package holds its prompt templates and output parsing:
- restaurant: search-grounded top-3 restaurant lookup for a city
"""
