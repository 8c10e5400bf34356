def log(message: str) -> None:
    print(message, flush=True)


def format_request_line(timestamp: str, method: str, path: str, status_code: int) -> str:
    return f"[{timestamp}] {method} {path} - {status_code}"


def log_request(timestamp: str, method: str, path: str, status_code: int) -> None:
    log(format_request_line(timestamp, method, path, status_code))
