import os
import logging
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv
load_dotenv()


def _csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass
class Settings:
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    # tried in order after OPENAI_MODEL
    OPENAI_FALLBACK_MODELS: List[str] = field(
        default_factory=lambda: _csv(os.getenv("OPENAI_FALLBACK_MODELS", "gpt-4o,gpt-3.5-turbo"))
    )
    OPENAI_TIMEOUT: int = int(os.getenv("OPENAI_TIMEOUT", "90"))
    EMBED_MODEL: str = os.getenv("EMBED_MODEL", "text-embedding-3-small")

    # rate-limit backoff (seconds)
    RETRY_MAX: int = int(os.getenv("RETRY_MAX", "3"))
    RETRY_INITIAL_DELAY: float = float(os.getenv("RETRY_INITIAL_DELAY", "1.0"))
    RETRY_MAX_DELAY: float = float(os.getenv("RETRY_MAX_DELAY", "10.0"))
    RETRY_BACKOFF: float = float(os.getenv("RETRY_BACKOFF", "2.0"))

    # fuzzy matching
    SIMILARITY_THRESHOLD: float = float(os.getenv("SIMILARITY_THRESHOLD", "0.7"))
    SEMANTIC_THRESHOLD: float = float(os.getenv("SEMANTIC_THRESHOLD", "0.8"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def models(self) -> List[str]:
        """Primary model first, then fallbacks, without repeats."""
        out = []
        for m in [self.OPENAI_MODEL, *self.OPENAI_FALLBACK_MODELS]:
            if m and m not in out:
                out.append(m)
        return out


settings = Settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# fail soft in dev: the graph matcher and repair engine work without a key
if not settings.OPENAI_API_KEY:
    logging.getLogger(__name__).warning("[cfg] WARNING: OPENAI_API_KEY missing")
