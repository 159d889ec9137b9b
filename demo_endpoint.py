"""
Quick demo script to run the Global Gourmet Scout API locally.

This script starts a local server and shows how to make requests to it.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Global Gourmet Scout Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET    http://localhost:8000/health")
    print("   - Search:        POST   http://localhost:8000/restaurants/search")
    print("   - Favorites:     GET    http://localhost:8000/favorites")
    print("   - Toggle:        POST   http://localhost:8000/favorites/toggle")
    print("   - API Keys:      GET/PUT http://localhost:8000/settings/api-keys")
    print("   - Languages:     GET    http://localhost:8000/settings/languages")
    print("   - API Docs:             http://localhost:8000/docs")
    print()
    print("🔑 Gemini key:")
    print("   Set GOOGLE_API_KEY in .env, or save one with PUT /settings/api-keys")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/restaurants/search" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"city": "Lisbon", "language": "en"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "scout.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
