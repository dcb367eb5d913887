import pytest
from bs4 import BeautifulSoup

from universal.universal import build_object, find_content, load_document
from universal.universal import walk
from universal.universal import test_key_is_value as key_is_value


class TestLoadDocument:
    def test_parses_string(self):
        soup = load_document("<h1>Roland</h1>")
        assert soup.find("h1").get_text() == "Roland"

    def test_parses_bytes(self):
        soup = load_document(b"<h1>Roland</h1>")
        assert soup.find("h1").get_text() == "Roland"

    def test_tag_passes_through(self):
        bs = BeautifulSoup("<div><h1>Roland</h1></div>", "html.parser")
        assert load_document(bs.div) is bs.div

    def test_rejects_non_document(self):
        with pytest.raises(TypeError):
            load_document(42)

    def test_rejects_none(self):
        with pytest.raises(TypeError):
            load_document(None)

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            load_document("   \n")


class TestFindContent:
    def test_article_view(self):
        soup = load_document(
            '<div class="menu"><h2>Nav</h2></div>'
            '<div class="article_view"><h2>Passive</h2></div>')
        content = find_content(soup)
        assert content.name == "div"
        assert content["class"] == ["article_view"]

    def test_falls_back_to_body(self):
        soup = load_document("<h2>Passive</h2><blockquote>Iron Skin</blockquote>")
        assert find_content(soup).name == "body"

    def test_falls_back_to_root(self):
        bs = BeautifulSoup("<section><h2>Passive</h2></section>", "html.parser")
        assert find_content(bs.section) is bs.section


class TestWalk:
    def test_visits_typed_dicts(self):
        struct = {
            "type": "character",
            "passives": [{"type": "group", "items": [
                {"type": "item", "name": "a"}, {"type": "item", "name": "b"}]}],
            "equipment": {"usable": [{"type": "item", "name": "c"}]},
        }
        names = []
        walk(struct, key_is_value("type", "item"),
             lambda item, parent: names.append(item["name"]))
        assert names == ["a", "b", "c"]

    def test_parent_is_passed(self):
        items = [{"type": "item", "name": "a"}]
        parents = []
        walk({"type": "group", "items": items}, key_is_value("type", "item"),
             lambda item, parent: parents.append(parent))
        assert parents == [items]

    def test_untyped_dicts_ignored(self):
        assert not key_is_value("type", "item")({"name": "a"})


class TestBuildObject:
    def test_strips_name(self):
        obj = build_object("group", "passive", " Strength ", {"items": []})
        assert obj == {
            "type": "group", "subtype": "passive", "name": "Strength", "items": []}
