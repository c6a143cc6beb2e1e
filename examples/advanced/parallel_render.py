"""Thread-safe: one parser, 1000 documents rendered in parallel."""

from concurrent.futures import ThreadPoolExecutor

from texspan import create_markdown

md = create_markdown()
docs = [f"# Doc {i}\n\nThe value is $x_{{{i}}}$.\n" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(md.render, docs))

print(f"Rendered {len(results)} documents in parallel")
print(results[-1])
