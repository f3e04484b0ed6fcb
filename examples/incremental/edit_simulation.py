"""Edit line by line — sweeps run only when an edit can change other lines."""

from pincel import Highlighter
from pincel.profiling import profiled_sweeps

h = Highlighter()
h.keyword("keyword", r"\b(fn|let)\b")
h.bounded("comment", "/*", "*/", escapable=False)
h.bounded_interp("string", '"', '"', "{", "}")

doc = ["fn main() {", '    let s = "hi {name}";', "}"]
h.run(doc)

with profiled_sweeps() as metrics:
    # Typing inside the string keeps the line's shape: no sweep
    doc[1] = '    let s = "hello {name}";'
    h.edit(1, doc[1])
    # Opening a comment changes every later line: one sweep
    doc[0] = "/* fn main() {"
    h.edit(0, doc[0])

print(metrics.summary())
print("Line 2 now:", h.line(2, doc[2]))
