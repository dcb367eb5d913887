import copy
import json
import os
import re
import sys
import uuid

from charsheet.bonus import STATS, dedupe_bonuses, extract_bonuses
from charsheet.schema import validate_against_schema
from charsheet.tag import classify_tags, get_tag_rules
from charsheet.timing import PER_BATTLE, build_time_param, extract_time_params
from universal.files import char_replace, makedirs
from universal.universal import build_object, find_content, load_document
from universal.universal import walk, test_key_is_value
from universal.utils import child_tags, find_list, get_text, is_tag_named
from universal.utils import join_text, log_element, normalize

PASSIVE = "PASSIVE"
ACTIVE = "ACTIVE"
EQUIPMENT = "EQUIPMENT"

DEFAULT_FACTION = "Light"
DEFAULT_GROUP_NAME = "General"

TRIGGER_ALWAYS = "always"
TRIGGER_POST = "post"
TRIGGER_COMBAT_START = "Combat_Start"

HEADING_TAGS = ["cite", "h2", "h3", "h4"]
ITEM_TAGS = ["blockquote"]
PARAGRAPH_TAGS = ["p"]
BOLD_TAGS = ["b", "strong"]

PASSIVE_WORDS = ["passive", "пассивные"]
ACTIVE_WORDS = ["active", "активные"]
EQUIPMENT_WORDS = [
    "equipment", "inventory", "belongings", "снаряжение", "инвентарь", "имущество"]
DEBUFF_WORDS = ["debuff", "дебафф"]
FLAW_HEADING_WORDS = DEBUFF_WORDS + [
    "curse", "affliction", "injur", "peculiarit", "прокляти", "особенности", "травмы"]
FLAW_GROUP_WORDS = DEBUFF_WORDS + ["minus", "минус"]
BLOCKED_WORDS = ["blocked", "заблокировано"]
AURA_WORDS = ["aura", "аура"]

STAT_PATTERN = r"\b(?:%s)(?:\.|\b)[^:\d.!?\n\-\u2212\u2013]{0,40}?[: ]*\+?(\d+)"
STAT_PATTERNS = [
    ("phys", re.compile(STAT_PATTERN % r"phys(?:ical)?|физ\w*", re.I)),
    ("magic", re.compile(STAT_PATTERN % r"magic(?:al)?|mag|маг\w*", re.I)),
    ("unique", re.compile(STAT_PATTERN % r"unique|uniq|уник\w*", re.I)),
]
LEVEL_PATTERN = re.compile(r"\b(?:level|lvl|уровень)\.? *:? *(\d+)", re.I)
FACTION_PATTERN = re.compile(r"\b(?:faction|фракция) *: *([^\n.,;:]+)", re.I)
BLOCK_TAGS = [
    "p", "li", "td", "th", "dt", "dd", "cite", "blockquote",
    "h1", "h2", "h3", "h4", "h5", "h6"]


def parse_character(filename, options):
    basename = os.path.basename(filename)
    if not options.stdout:
        sys.stderr.write("%s\n" % basename)
    with open(filename, "rb") as fp:
        struct = parse(fp.read(), default_faction=options.faction)
    if is_unrecognized(struct):
        log_element("unrecognized.log")(basename)
    if not options.skip_schema:
        validate_against_schema(struct, "character.schema.json")
    if not options.dryrun:
        jsondir = makedirs(options.output, "characters")
        write_character(jsondir, struct, basename)
    elif options.stdout:
        print(json.dumps(struct, indent=2, ensure_ascii=False))


def parse(document, default_faction=DEFAULT_FACTION):
    """Extract a character model from a character sheet html document.

    ``document`` is html as ``str``/``bytes`` or an already parsed bs4 tag.
    Anything the sheet does not state stays at its default, only input
    that is not a document at all raises.
    """
    soup = load_document(document)
    struct = build_character(default_faction)
    profile_pass(struct, soup)
    content = find_content(soup)
    stats_pass(struct, content)
    structure_pass(struct, content)
    finalize_pass(struct)
    return struct


def generate_id():
    return uuid.uuid4().hex


def build_character(faction=DEFAULT_FACTION):
    return {
        "type": "character",
        "id": "generated-%s" % generate_id(),
        "profile": {
            "name": "",
            "level": 1,
            "faction": faction,
            "avatar_url": "",
            "currencies": {"juhe": 0, "jumi": 0},
        },
        "stats": dict((stat, 0) for stat in STATS),
        "passives": [],
        "ability_groups": [],
        "equipment": {"usable": [], "wearable": [], "inventory": []},
    }


def build_group(name, subtype, is_flaw_group=False):
    return build_object("group", subtype, name, {
        "id": generate_id(),
        "is_flaw_group": is_flaw_group,
        "items": [],
    })


def build_item(name, subtype):
    return build_object("item", subtype, name, {
        "id": generate_id(),
        "tags": [],
        "cooldown": build_time_param(),
        "duration": build_time_param(),
        "usage_limit": build_time_param(),
        "lore_text": "",
        "mechanics_text": "",
        "bonuses": [],
        "trigger": TRIGGER_ALWAYS,
        "is_blocked": False,
        "trigger_ability_id": None,
    })


def profile_pass(struct, soup):
    profile = struct["profile"]
    h1 = soup.find("h1")
    if h1:
        profile["name"] = normalize(get_text(h1))
    img = soup.select_one("figure img[src]")
    if img:
        profile["avatar_url"] = img["src"].strip()


def stats_pass(struct, content):
    text = block_text(content)
    for stat, pattern in STAT_PATTERNS:
        match = pattern.search(text)
        if match:
            struct["stats"][stat] = int(match.group(1))
    match = LEVEL_PATTERN.search(text)
    if match:
        struct["profile"]["level"] = int(match.group(1))
    match = FACTION_PATTERN.search(text)
    if match and normalize(match.group(1)):
        struct["profile"]["faction"] = normalize(match.group(1))


def block_text(content):
    # One line per block element, so a phrase never runs on into the next element
    lines = [normalize(get_text(el)) for el in content.find_all(BLOCK_TAGS)]
    if not lines:
        return normalize(content.get_text(" "))
    return "\n".join(lines)


def structure_pass(struct, content):
    section = PASSIVE
    group = None
    item = None
    for node in child_tags(content):
        if is_tag_named(node, HEADING_TAGS):
            section, group = heading_transition(
                struct, normalize(get_text(node)), section, group)
        elif is_tag_named(node, ITEM_TAGS):
            if not group and section != EQUIPMENT:
                group = add_group(struct, DEFAULT_GROUP_NAME, section)
            if section == EQUIPMENT:
                item = build_item(normalize(get_text(node)), "usable")
                struct["equipment"]["usable"].append(item)
            else:
                item = build_item(normalize(get_text(node)), group["subtype"])
                group["items"].append(item)
        elif is_tag_named(node, PARAGRAPH_TAGS) and item:
            paragraph_pass(item, node)


def heading_transition(struct, text, section, group):
    """Returns the (section, group) in effect after a heading.

    A section heading closes the current group; any other heading outside
    the equipment section opens a new group.
    """
    lower = text.lower()
    if find_list(lower, PASSIVE_WORDS):
        return PASSIVE, None
    if find_list(lower, ACTIVE_WORDS):
        return ACTIVE, None
    if find_list(lower, EQUIPMENT_WORDS) and not find_list(lower, DEBUFF_WORDS):
        return EQUIPMENT, None
    if find_list(lower, FLAW_HEADING_WORDS):
        return PASSIVE, add_group(struct, text, PASSIVE, True)
    if section != EQUIPMENT:
        is_flaw = bool(find_list(lower, FLAW_GROUP_WORDS))
        return section, add_group(struct, text, section, is_flaw)
    return section, group


def add_group(struct, name, section, is_flaw_group=False):
    if section == PASSIVE:
        group = build_group(name, "passive", is_flaw_group)
        struct["passives"].append(group)
    else:
        group = build_group(name, "active", is_flaw_group)
        struct["ability_groups"].append(group)
    return group


def paragraph_pass(item, node):
    text = normalize(get_text(node))
    if not text:
        return
    # Any bold run makes the whole paragraph mechanics
    if node.find(BOLD_TAGS):
        item["mechanics_text"] = join_text(item["mechanics_text"], text)
        item["bonuses"].extend(extract_bonuses(text))
        params = extract_time_params(text)
        for field in ("cooldown", "duration"):
            if item[field]["value"] == 0 and params[field]["value"] > 0:
                item[field] = params[field]
        if find_list(text.lower(), BLOCKED_WORDS):
            item["is_blocked"] = True
    else:
        item["lore_text"] = join_text(item["lore_text"], text)


def finalize_pass(struct):
    def _finalize_item(item, parent):
        item["tags"] = classify_tags(
            item["name"], item["lore_text"], item["mechanics_text"], rules)
        item["bonuses"] = dedupe_bonuses(item["bonuses"])
        if item["cooldown"]["value"] > 0:
            item["trigger"] = TRIGGER_POST
        else:
            item["trigger"] = TRIGGER_ALWAYS
        if find_list(item["name"].lower(), AURA_WORDS):
            item["trigger"] = TRIGGER_COMBAT_START
            if not item["duration"]["unit"]:
                item["duration"]["unit"] = PER_BATTLE

    rules = get_tag_rules()
    remove_empty_groups_pass(struct)
    walk(struct, test_key_is_value("type", "item"), _finalize_item)
    for group in struct["passives"] + struct["ability_groups"]:
        group["abilities"] = copy.deepcopy(group["items"])


def remove_empty_groups_pass(struct):
    for key in ("passives", "ability_groups"):
        struct[key] = [g for g in struct[key] if len(g["items"]) > 0]


def is_unrecognized(struct):
    equipment = struct["equipment"]
    return not any([
        struct["profile"]["name"],
        struct["passives"],
        struct["ability_groups"],
        equipment["usable"], equipment["wearable"], equipment["inventory"],
        any(struct["stats"].values()),
    ])


def write_character(jsondir, struct, basename):
    name = struct["profile"]["name"] or os.path.splitext(basename)[0]
    print("%s: %s" % (struct["type"], name))
    filename = create_character_filename(jsondir, name)
    with open(filename, "w", encoding="utf-8") as fp:
        json.dump(struct, fp, indent=4, ensure_ascii=False)


def create_character_filename(jsondir, name):
    title = jsondir + "/" + char_replace(name) + ".json"
    return os.path.abspath(title)
