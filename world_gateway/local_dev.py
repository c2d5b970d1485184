"""
Local development server for the gateway.
Run this from the root directory: python -m world_gateway.local_dev
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

root_dir = Path(__file__).parent.parent


def main() -> None:
    # Settings are read when the app module is imported, so load .env first
    env_file = root_dir / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        print(f"Loaded environment variables from {env_file}")
    else:
        print("No .env file found. Using .env.example as reference.")

    print("Starting World Info Gateway...")
    print("API Documentation: http://localhost:3000/docs")

    uvicorn.run(
        "world_gateway.lambda_function:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
