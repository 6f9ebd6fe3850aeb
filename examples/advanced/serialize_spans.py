"""Send parsed spans over the wire — JSON round-trip."""

from spanmark import parse
from spanmark.serialization import from_json, to_json

doc = parse("|||spoiler||| with [a link](https://example.com)")

json_str = to_json(doc, indent=2)
restored = from_json(json_str)

print(json_str)
print("Original == restored:", doc == restored)
