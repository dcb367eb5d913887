from bs4 import BeautifulSoup, Tag


def load_document(document, parser="lxml"):
    if isinstance(document, Tag):
        return document
    if not isinstance(document, (str, bytes)):
        raise TypeError(
            "Expected html as str, bytes or a parsed Tag, got %s" % type(document).__name__)
    if not document.strip():
        raise ValueError("Empty document")
    return BeautifulSoup(document, parser)


def find_content(soup, cssclass="article_view"):
    # Wiki exports wrap the sheet in div.article_view, bare fragments do not
    content = soup.find(class_=cssclass)
    if content:
        return content
    if soup.body:
        return soup.body
    return soup


def walk(struct, test, function, parent=None):
    if test(struct):
        function(struct, parent)
    if isinstance(struct, dict):
        for k, v in struct.items():
            walk(v, test, function, struct)
    elif isinstance(struct, list):
        for i in struct:
            walk(i, test, function, struct)


def test_key_is_value(k, v):
    def test(struct):
        if isinstance(struct, dict):
            if 'type' in struct:
                if struct.get(k) == v:
                    return True
        return False
    return test


def build_object(dtype, subtype, name, keys=None):
    assert type(name) is str
    obj = {
        'type': dtype,
        'subtype': subtype,
        'name': name.strip()
    }
    if keys:
        obj.update(keys)
    return obj
