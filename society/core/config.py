import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from society.core.errors import ConfigurationError

# ============================================
# AUTH TOGGLE CONFIGURATION
# ============================================
# To run against Supabase:       DISABLE_AUTH=false (default)
# To run fully in-process:        DISABLE_AUTH=true
# Local mode keeps accounts and documents in memory and seeds one
# committee account (admin@local.dev / admin123).
# ============================================

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def load_env() -> None:
    """Load .env from streamlit_app/ first, then the project root, then default lookup."""
    streamlit_app_env = PROJECT_ROOT / "streamlit_app" / ".env"
    project_root_env = PROJECT_ROOT / ".env"

    if streamlit_app_env.exists():
        load_dotenv(dotenv_path=streamlit_app_env)
    elif project_root_env.exists():
        load_dotenv(dotenv_path=project_root_env)
    else:
        load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    disable_auth: bool = False
    phone_country_code: str = "+91"
    log_level: str = "INFO"

    def require_supabase(self) -> None:
        if self.disable_auth:
            return
        if not self.supabase_url or not self.supabase_anon_key:
            raise ConfigurationError(
                "Supabase environment variables not set. "
                f"SUPABASE_URL={'set' if self.supabase_url else 'missing'}, "
                f"SUPABASE_ANON_KEY={'set' if self.supabase_anon_key else 'missing'}"
            )


def load_settings() -> Settings:
    load_env()
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY"),
        supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
        disable_auth=_env_flag("DISABLE_AUTH", "false"),
        phone_country_code=os.getenv("PHONE_COUNTRY_CODE", "+91"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger. Safe to call on every Streamlit rerun."""
    root = logging.getLogger()
    if any(getattr(h, "_society_handler", False) for h in root.handlers):
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    handler._society_handler = True
    root.addHandler(handler)
    root.setLevel(level)
