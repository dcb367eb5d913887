from charsheet.data import get_data


def get_tag_rules():
    """Ordered tag rules, each ``{"tag": name, "keywords": [roots]}``.

    Rules only ever get appended to tags.json, a tag hit is never revoked
    by a later rule.
    """
    return get_data("tags.json")


def classify_tags(name, lore_text, mechanics_text, rules=None):
    if rules is None:
        rules = get_tag_rules()
    combined = " ".join([name or "", lore_text or "", mechanics_text or ""]).lower()
    tags = []
    for rule in rules:
        if rule["tag"] in tags:
            continue
        for keyword in rule["keywords"]:
            if keyword in combined:
                tags.append(rule["tag"])
                break
    return tags
