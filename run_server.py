#!/usr/bin/env python3
"""
Development server launcher for the Say It Better rewriter.

This script starts the FastAPI server with appropriate settings for development.
For production, you'd use a proper ASGI server deployment.
"""

import os
import uvicorn
from pathlib import Path

project_root = Path(__file__).parent
src_path = project_root / "src"

if __name__ == "__main__":
    print("Starting Say It Better Development Server")
    print(f"Project root: {project_root}")
    print("Form available at: http://localhost:8000/")
    print("Rewrite endpoint: POST http://localhost:8000/api/rewrite")
    print("API documentation at: http://localhost:8000/docs")
    if not os.environ.get("OPENAI_API_KEY"):
        print("Warning: OPENAI_API_KEY is not set; rewrites will fail with a 500 until it is")
    print("\n" + "="*50 + "\n")

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",  # Accept connections from any IP
        port=8000,
        reload=True,     # Auto-reload on code changes (development only)
        reload_dirs=[str(src_path), str(project_root / "prompts")],
        log_level="info"
    )
