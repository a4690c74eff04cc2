import os


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}




def env_str(name: str, default: str | None = None) -> str | None:
    v = os.environ.get(name)
    if v is None or not v.strip():
        return default
    return v.strip()




def env_flag(name: str, default: bool = False) -> bool:
    v = (os.environ.get(name) or "").strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return default




def env_int(name: str, default: int, minimum: int | None = None) -> int:
    v = try_parse_int(os.environ.get(name))
    if v is None:
        return default
    if minimum is not None and v < minimum:
        return minimum
    return v




def try_parse_int(s):
    if s is None:
        return None
    t = str(s).strip()
    if not t:
        return None
    try:
        return int(t)
    except ValueError:
        return None
