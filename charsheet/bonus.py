import re

STATS = ["phys", "magic", "unique"]

SIGNED_NUMBER = re.compile(r"[+\-\u2212\u2013]\d+")
# Wiki editors type the Unicode minus or an en dash for "-"
MINUS_SIGNS = str.maketrans("\u2212\u2013", "--")
CONTEXT_WINDOW = 40

# English roots are anchored to a word start, "damage" must not read as magic
PHYS_WORDS = re.compile(r"\bphys|\bstrength|\bbody|\battack|физ|сила|тело|атак")
MAGIC_WORDS = re.compile(r"\bmagi|\bspell|\bmind\b|\bintellect|маг|чары|разум|интеллект")
UNIQUE_WORDS = re.compile(r"\bunique|\bspecial|уник|особен|специф")

DECLARATIONS = [
    ("phys", re.compile(
        r"\bphys(?:ical|\.)?\s*(?:ability|strength|power|damage)"
        r"|физ\.?\s*(?:способность|сила|урон)"
        r"|физическая\s*(?:способность|сила)")),
    ("magic", re.compile(
        r"\bmag(?:ic|ical|\.)?\s*(?:ability|strength|power|damage)"
        r"|маг\.?\s*(?:способность|сила|урон)"
        r"|магическая\s*(?:способность|сила)")),
    ("unique", re.compile(
        r"\buniq(?:ue|\.)?\s*(?:ability|strength|power|damage)"
        r"|уник\.?\s*(?:способность|сила|урон)"
        r"|уникальная\s*(?:способность|сила)")),
]


def build_bonus(value, stat):
    return {"value": value, "stat": stat}


def classify_context(context):
    if PHYS_WORDS.search(context) and not MAGIC_WORDS.search(context):
        return "phys"
    elif MAGIC_WORDS.search(context):
        return "magic"
    elif UNIQUE_WORDS.search(context):
        return "unique"
    return None


def extract_bonuses(mechanics_text):
    """Stat bonuses mentioned in a mechanics paragraph.

    Every signed integer is classified by the keywords within
    CONTEXT_WINDOW characters of it; numbers with no stat keyword nearby
    (cooldowns, counts) are dropped.  A stat with no signed number but a
    declarative phrase such as "physical ability" gets a zero bonus.
    """
    lower = (mechanics_text or "").lower()
    bonuses = []
    found = set()
    for match in SIGNED_NUMBER.finditer(lower):
        start = max(0, match.start() - CONTEXT_WINDOW)
        end = min(len(lower), match.start() + CONTEXT_WINDOW)
        stat = classify_context(lower[start:end])
        if stat:
            value = int(match.group().translate(MINUS_SIGNS))
            bonuses.append(build_bonus(value, stat))
            found.add(stat)
    for stat, declaration in DECLARATIONS:
        if stat not in found and declaration.search(lower):
            bonuses.append(build_bonus(0, stat))
    return dedupe_bonuses(bonuses)


def dedupe_bonuses(bonuses):
    seen = set()
    unique = []
    for bonus in sorted(bonuses, key=lambda b: abs(b["value"]), reverse=True):
        if bonus["stat"] not in seen:
            seen.add(bonus["stat"])
            unique.append(bonus)
    return unique
