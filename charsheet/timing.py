import re

PER_TURN = "per-turn"
PER_BATTLE = "per-battle"
PER_BATTLE_USES = "per-battle-uses"
PER_HOUR = "per-hour"

COOLDOWN = re.compile(
    r"(?:\bcd\b|cooldown|recharge|recovery time|кд|перезарядка|время восстановления)"
    r"[.:\s]*(\d+)\s*([^\W\d_]+)?")
DURATION = re.compile(
    r"(?:duration|time active|длительность|время действия)"
    r"[.:\s]*(\d+)\s*([^\W\d_]+)?")

COOLDOWN_UNITS = [
    (("turn", "round", "post", "ход"), PER_TURN),
    (("time", "use", "charge", "раз"), PER_BATTLE_USES),
    (("hour", "час"), PER_HOUR),
]
DURATION_UNITS = [
    (("turn", "round", "post", "ход"), PER_TURN),
    (("battle", "fight", "combat", "битв", "бо"), PER_BATTLE),
]


def build_time_param(value=0, unit=""):
    return {"value": value, "unit": unit}


def canonical_unit(word, units, default=PER_TURN):
    if not word:
        return default
    for prefixes, unit in units:
        if word.startswith(prefixes):
            return unit
    return default


def _extract(regex, units, lower):
    match = regex.search(lower)
    if not match:
        return build_time_param()
    return build_time_param(
        int(match.group(1)), canonical_unit(match.group(2), units))


def extract_time_params(text):
    lower = (text or "").lower()
    return {
        "cooldown": _extract(COOLDOWN, COOLDOWN_UNITS, lower),
        "duration": _extract(DURATION, DURATION_UNITS, lower),
    }
