"""Render a horizontally scrolled viewport with ANSI colours."""

from pincel import Highlighter, window

COLOURS = {
    "comment": "\x1b[90m",
    "string": "\x1b[32m",
    "keyword": "\x1b[33m",
    "digit": "\x1b[35m",
}
RESET = "\x1b[0m"

CODE = [
    "\tlet 名前 = \"世界 {count}\"; // greeting",
    "  fn count() { return 42; }",
    "/* wide 文字 survive",
    "   the cut */ let x = 1;",
]

h = Highlighter(tab_width=4)
h.bounded("comment", "/*", "*/", escapable=False)
h.keyword("comment", r"//.*$")
h.bounded_interp("string", '"', '"', "{", "}")
h.keyword("keyword", r"\b(fn|let|return)\b")
h.keyword("digit", r"\b\d+\b")
h.run(CODE)

for offset in range(0, 12, 3):
    print(f"--- columns {offset}..{offset + 20}")
    for y, text in enumerate(CODE):
        out = []
        for run in window(h.line(y, text), offset, 20, tab_width=h.tab_width):
            if run.kind is None:
                out.append(run.text)
            else:
                out.append(f"{COLOURS[run.kind]}{run.text}{RESET}")
        print("".join(out) + "|")
