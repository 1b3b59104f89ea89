# run.py
import os
from pathlib import Path

# Load .env for local dev (ignore if the file isn't present, containers pass real env vars)
from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).with_name(".env"), override=True)

from app import create_app

app = create_app()

if __name__ == "__main__":
    # no reloader to avoid double imports
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "3000")), debug=True, use_reloader=False)
