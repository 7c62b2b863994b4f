"""
Zairyo - Vercel Serverless Entry Point
======================================

Exposes the FastAPI application from the backend to Vercel's Python runtime.

Environment Variables (set in Vercel dashboard):
  - ENABLE_EXTERNAL: "true" to merge TheMealDB results into searches
  - VISION_PROVIDER: "openai" (default) or "gemini"
  - OPENAI_API_KEY / GEMINI_API_KEY: credentials for /api/detect
"""

import sys
from pathlib import Path

# Add the backend directory to Python path
# This allows imports like "from app.assistant import RecipeAssistant"
backend_dir = Path(__file__).resolve().parent.parent / "backend"
sys.path.insert(0, str(backend_dir))

# Import the FastAPI app from main.py
from main import app

# Vercel expects the app to be available at module level
# The "app" variable is automatically picked up by @vercel/python
