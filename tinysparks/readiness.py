"""Readiness checks: config, packages, LLM credentials, favorites storage."""
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# Result: (passed: bool, message: str)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]

REQUIRED_CHECKS = {"config", "packages", "storage"}


def check_config() -> CheckResult:
    """Load settings and read the fields the app needs at startup."""
    try:
        from tinysparks.settings import get_settings
        s = get_settings()
        _ = s.app_name
        _ = s.llm_default_text_model
        _ = s.favorites_storage_key
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_packages() -> CheckResult:
    """Import critical modules: uvicorn, fastapi, google.genai, tinysparks.main."""
    missing = []
    try:
        import uvicorn  # noqa: F401
    except ImportError:
        missing.append("uvicorn")
    try:
        import fastapi  # noqa: F401
    except ImportError:
        missing.append("fastapi")
    try:
        import google.genai  # noqa: F401
    except ImportError:
        missing.append("google-genai")
    try:
        import tinysparks.main  # noqa: F401
    except ImportError as e:
        missing.append(f"tinysparks.main ({e})")
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


def check_llm_credentials() -> CheckResult:
    """Gemini API key present. Plans cannot be generated without it, but favorites still work."""
    try:
        from tinysparks.settings import get_settings
        if (get_settings().gemini_api_key or "").strip():
            return True, "ok"
        return False, "GEMINI_API_KEY (or API_KEY) not set"
    except Exception as e:
        return False, str(e)


def check_storage() -> CheckResult:
    """Favorites storage usable: memory backend, or the file's directory is writable."""
    try:
        from tinysparks.settings import get_settings
        s = get_settings()
        backend = (s.favorites_storage_backend or "file").strip().lower()
        if backend == "memory":
            return True, "memory (not persisted)"
        if backend != "file":
            return False, f"unknown backend {backend!r}"
        directory = Path(s.favorites_storage_path).expanduser().resolve().parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(directory), suffix=".probe")
        os.close(fd)
        os.unlink(tmp)
        return True, "ok"
    except Exception as e:
        return False, str(e)


def run_all_checks() -> ChecksDict:
    """Run all readiness checks. Returns dict of check_name -> (passed, message)."""
    return {
        "config": check_config(),
        "packages": check_packages(),
        "llm_credentials": check_llm_credentials(),
        "storage": check_storage(),
    }


def is_ready(checks: ChecksDict | None = None) -> tuple[bool, dict[str, str]]:
    """
    True if all required checks pass. llm_credentials is reported but not required.
    Returns (ready, summary of name -> "ok" | message).
    """
    if checks is None:
        checks = run_all_checks()
    summary: dict[str, str] = {name: msg for name, (passed, msg) in checks.items()}
    all_required = all(checks[n][0] for n in REQUIRED_CHECKS if n in checks)
    return all_required, summary
