# scripts/check_env.py
# Reports which settings are present in .env / the environment. Never prints secrets.
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env")

REQUIRED = ["GEMINI_API_KEY", "ZAI_API_KEY"]
OPTIONAL = ["DATABASE_URL", "UPLOAD_FOLDER", "GEMINI_MODEL", "ZAI_MODEL", "ZAI_BASE_URL", "DEFAULT_MODEL"]


def _mask(value: str) -> str:
    return value[:4] + "..." if len(value) > 8 else "***"


missing = []
for key in REQUIRED:
    value = os.getenv(key) or (os.getenv("Z_API_KEY") if key == "ZAI_API_KEY" else None)
    if value:
        print(f"[OK] {key} loaded ({_mask(value)})")
    else:
        print(f"[!] {key} is not set")
        missing.append(key)

for key in OPTIONAL:
    print(f"    {key} = {os.getenv(key) or '(default)'}")

if missing:
    raise SystemExit(1)
