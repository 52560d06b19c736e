import os
from pathlib import Path


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    try:
        for line in path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or "=" not in stripped:
                continue
            key, value = stripped.split("=", 1)
            key = key.strip()
            if not key or key in os.environ:
                continue
            cleaned = value.strip().strip('"').strip("'")
            os.environ[key] = cleaned
    except OSError:
        return


def _load_env() -> None:
    current = Path(__file__).resolve()
    for candidate in (current.parents[2] / ".env", Path.cwd() / ".env"):
        _load_env_file(candidate)


_load_env()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


HOST = os.getenv("DISTMOCK_HOST", "127.0.0.1").strip() or "127.0.0.1"
PORT = int(os.getenv("DISTMOCK_PORT", "0"))
LOG_LEVEL = os.getenv("DISTMOCK_LOG_LEVEL", "INFO").strip().upper() or "INFO"
ACCESS_LOG = _env_flag("DISTMOCK_ACCESS_LOG", "true")
SEED_SAMPLE_DATA = _env_flag("DISTMOCK_SEED_SAMPLE_DATA", "true")
CDN_CHUNK_SIZE = max(1, int(os.getenv("DISTMOCK_CDN_CHUNK_SIZE", str(64 * 1024))))
PUBLIC_URL = os.getenv("DISTMOCK_PUBLIC_URL", "http://example.org").strip() or "http://example.org"
