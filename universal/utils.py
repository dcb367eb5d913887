import re
import warnings
from bs4 import Tag, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

WHITESPACE = re.compile(r"\s+")

def normalize(text):
	if not text:
		return ""
	return WHITESPACE.sub(" ", text).strip()

def join_text(text, addition, sep="\n"):
	if not text:
		return addition
	return text + sep + addition

def find_list(text, elements):
	for element in elements:
		if text.find(element) > -1:
			return element
	return False

def log_element(fn):
	def log_e(element):
		with open(fn, "a+") as fp:
			fp.write(element)
			fp.write("\n")
	return log_e

def is_tag_named(element, taglist):
	if type(element) != Tag:
		return False
	elif element.name in taglist:
		return True
	return False

def get_text(detail):
	return ''.join(detail.find_all(string=True))

def child_tags(element):
	return [c for c in element.children if type(c) == Tag]
