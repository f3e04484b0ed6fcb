"""Highlight a two-line snippet — three rules, zero deps."""

from pincel import Highlighter

h = Highlighter()
h.keyword("keyword", r"\bfn\b")
h.bounded("comment", "/*", "*/", escapable=False)

doc = ["/* a", "*/ fn"]
h.run(doc)
for y, text in enumerate(doc):
    print(h.line(y, text))
