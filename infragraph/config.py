import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

API_TITLE = os.getenv("INFRAGRAPH_API_TITLE", "Infrastructure Graph")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("INFRAGRAPH_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
LOG_LEVEL = os.getenv("INFRAGRAPH_LOG_LEVEL", "INFO").upper()
STRICT_VALIDATION = os.getenv("INFRAGRAPH_STRICT_VALIDATION", "false").lower() in ("1", "true", "yes")
