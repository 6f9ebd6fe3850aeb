"""Parse and render a chat message in 3 lines — zero config, zero deps."""

from spanmark import parse, render

doc = parse("Hello ***world***, @alice said #hi")
print([(span.text, span.element_type.name) for span in doc])
print(render(doc))
