"""Logic for reducing SQL text to its content-bearing form."""


def normalize_sql(text: str | None) -> str:
    """Strip comments and collapse whitespace outside string literals.

    Line (``--``) and block (``/* */``) comments are dropped, every run of
    whitespace outside a single-quoted literal becomes one space, and the
    result is trimmed. Literal contents, including doubled ``''`` quotes and
    inner whitespace, are copied verbatim.
    """
    if not text or not text.strip():
        return ""

    out: list[str] = []
    in_string = False
    pending_space = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "'":
                if i + 1 < n and text[i + 1] == "'":
                    out.append("'")
                    i += 2
                    continue
                in_string = False
            i += 1
            continue

        if ch == "-" and text.startswith("--", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            pending_space = True
            continue

        if ch == "/" and text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            pending_space = True
            continue

        if ch.isspace():
            pending_space = True
            i += 1
            continue

        if pending_space and out:
            out.append(" ")
        pending_space = False
        out.append(ch)
        if ch == "'":
            in_string = True
        i += 1

    return "".join(out).strip()
