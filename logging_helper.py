import json
import logging

RED = "\033[91m"
YELLOW = "\033[93m"
GREEN = "\033[92m"
CYAN = "\033[96m"
RESET = "\033[0m"
WHITE = "\033[97m"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s.%(msecs)03d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("api_tests")

_COLORS = {
    "error": RED,
    "warning": YELLOW,
    "good": GREEN,
    "request": CYAN,
}


def log_status(status, message, extra=""):
    status = status.lower()
    color = _COLORS.get(status, WHITE)

    if status == "error":
        level = logging.ERROR
    elif status == "warning":
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.log(level, f"{color}{message}{extra}{RESET}")


def log_payload(label, payload):
    """Pretty-print a request/response body or a generated record."""
    if isinstance(payload, (dict, list)):
        text = json.dumps(payload, indent=2, ensure_ascii=False)
    else:
        text = str(payload)
    log_status("info", f"{label}:\n", text)
