"""
Shared constants for the restaurant search pipeline.
"""

# Keys used in the key-value storage
STORAGE_KEYS = {
    'GEMINI_KEY': 'gemini_api_key',
    'PEXELS_KEY': 'pexels_api_key',
    'PIXABAY_KEY': 'pixabay_api_key',
    'FAVORITES': 'favorites',
}

# Result language codes offered in the app settings menu
LANGUAGE_NAMES = {
    'en': 'English',
    'zh': 'Chinese',
    'fr': 'French',
    'es': 'Spanish',
    'ja': 'Japanese',
}

DEFAULT_LANGUAGE = 'en'

# The prompt asks for exactly three; anything beyond is dropped
MAX_RESTAURANTS = 3
