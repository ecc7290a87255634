from dotenv import load_dotenv
import os

# .env 읽어오기
load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Webhook 전송
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "5.0"))
VERIFY_SSL = os.getenv("VERIFY_SSL", "true").lower() not in ("0", "false", "no")
