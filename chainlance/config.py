import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

    # Browser-style local storage: one serialized value per key
    STORAGE_DIR = os.getenv("STORAGE_DIR", os.path.abspath("./data"))
    STORAGE_KEY = os.getenv("STORAGE_KEY", "chainlance_job_pool_v3")

    # When set, the job pool is kept in MongoDB instead of a local file
    MONGO_URI = os.getenv("MONGO_URI", "")
    MONGO_DB = os.getenv("MONGO_DB", "chainlance")

    ADVISORY_MODEL = os.getenv("ADVISORY_MODEL", "gemini/gemini-2.0-flash")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    DEFAULT_DEADLINE_DAYS = int(os.getenv("DEFAULT_DEADLINE_DAYS", "14"))

    WALLET_INSTALL_URL = os.getenv("WALLET_INSTALL_URL", "https://phantom.app/")
    # The demo wallet stands in for a browser extension; disabled means "not installed"
    DEMO_WALLET_ENABLED = os.getenv("DEMO_WALLET_ENABLED", "true").lower() == "true"
    DEMO_WALLET_ADDRESS = os.getenv("DEMO_WALLET_ADDRESS", "")
    DEMO_WALLET_TRUSTED = os.getenv("DEMO_WALLET_TRUSTED", "true").lower() == "true"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
