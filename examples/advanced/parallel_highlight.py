"""Share one immutable rule table across threads — one engine per document."""

from concurrent.futures import ThreadPoolExecutor

from pincel import PatternRegistryBuilder, highlight

registry = (
    PatternRegistryBuilder()
    .add_bounded("comment", "/*", "*/", escapable=False)
    .add_keyword("keyword", r"\b(fn|return)\b")
    .add_keyword("digit", r"\b\d+\b")
    .build()
)

docs = [[f"fn f{i}() {{", f"    return {i}; /* doc {i} */", "}"] for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(lambda doc: highlight(doc, registry), docs))

print(f"Highlighted {len(results)} documents in parallel")
print("Last doc, line 1:", results[-1][1])
