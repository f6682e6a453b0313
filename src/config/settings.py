"""
Runtime settings
Read from environment variables (.env locally, Streamlit secrets on the cloud).
"""

import os
from typing import Dict, Optional, NamedTuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_REGION = 'KR'

# Legacy NEXT_PUBLIC_* names from the earlier web build; still honoured so an old .env keeps working
LEGACY_KEYS = {
    'YOUTUBE_API_KEY': 'NEXT_PUBLIC_YOUTUBE_API_KEY',
    'GEMINI_API_KEY': 'NEXT_PUBLIC_GEMINI_API_KEY',
}


def _read(name: str, env: Dict[str, str]) -> str:
    value = env.get(name, '')
    if not value and name in LEGACY_KEYS:
        value = env.get(LEGACY_KEYS[name], '')
    return value.strip()


class Settings(NamedTuple):
    youtube_api_key: str = ''
    gemini_api_key: str = ''
    openai_api_key: str = ''
    anthropic_api_key: str = ''
    llm_provider: Optional[str] = None
    llm_model: Optional[str] = None
    region_code: str = DEFAULT_REGION

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> 'Settings':
        env = os.environ if env is None else env
        return cls(
            youtube_api_key=_read('YOUTUBE_API_KEY', env),
            gemini_api_key=_read('GEMINI_API_KEY', env),
            openai_api_key=_read('OPENAI_API_KEY', env),
            anthropic_api_key=_read('ANTHROPIC_API_KEY', env),
            llm_provider=_read('LLM_PROVIDER', env).lower() or None,
            llm_model=_read('LLM_MODEL', env) or None,
            region_code=_read('REGION_CODE', env).upper() or DEFAULT_REGION,
        )


def export_streamlit_secrets(secrets) -> None:
    """
    Copy Streamlit secrets into os.environ so every module can use os.getenv().
    Locally .env is used; on Streamlit Cloud the secrets are set in the dashboard.
    """
    try:
        for key, value in secrets.items():
            os.environ.setdefault(key, str(value))
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
