import math
import time
from shutil import get_terminal_size


def _human_time(s: float) -> str:
    if math.isinf(s) or math.isnan(s):
        return "--:--:--"
    m, sec = divmod(int(max(0, s)), 60)
    h, m = divmod(m, 60)
    return f"{h:02d}:{m:02d}:{sec:02d}"


def _progress_line(done: int, total: int, start_ts: float, extra: str = "") -> str:
    elapsed = max(1e-6, time.monotonic() - start_ts)
    rate_sp_s = done / elapsed
    rate_sp_m = rate_sp_s * 60.0
    remaining = max(0, total - done)
    eta_s = remaining / rate_sp_s if rate_sp_s > 0 else float("inf")
    termw = max(40, get_terminal_size((100, 20)).columns)
    bar_w = min(30, max(10, termw - 70))
    filled = int(bar_w * (done / total)) if total else 0
    bar = "█" * filled + "─" * (bar_w - filled)
    pct = (done / total * 100.0) if total else 0.0
    base = f"[{bar}] {done}/{total} ({pct:5.1f}%) | {rate_sp_m:5.1f} sp/min | ETA {_human_time(eta_s)}"
    if extra:
        base += f" | {extra}"
    return base
