from typing import List

def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def expand_braces(pattern: str) -> List[str]:
    """
    Expand shell-style brace groups, e.g. "**/*.{mp4,mkv}" -> ["**/*.mp4", "**/*.mkv"].
    Groups may repeat and nest; a lone "{" without a closing "}" is kept literally.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    for end in range(start, len(pattern)):
        ch = pattern[end]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                break
    else:
        return [pattern]

    head, body, tail = pattern[:start], pattern[start + 1:end], pattern[end + 1:]

    # split body on top-level commas only
    options: List[str] = []
    depth = 0
    current = ""
    for ch in body:
        if ch == "," and depth == 0:
            options.append(current)
            current = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        current += ch
    options.append(current)

    out: List[str] = []
    for opt in options:
        for expanded in expand_braces(head + opt + tail):
            if expanded not in out:
                out.append(expanded)
    return out
