"""Extend the built-in catalog with a ~~~strike~~~ rule and custom HTML."""

from spanmark import ElementType, Markup, create_catalog_with_defaults, default_wrap, delimited

builder = create_catalog_with_defaults()
builder.insert_before("word_bold", delimited("strike", "~", ElementType.UNDERLINE))


def wrap(fragment: str, element_type: ElementType) -> str:
    if element_type == ElementType.MENTION:
        return f'<a class="mention" href="/users/{fragment}">@{fragment}</a>'
    return default_wrap(fragment, element_type)


md = Markup(catalog=builder.build(), wrap=wrap)
print(md("~~~old~~~ ping @bob"))
