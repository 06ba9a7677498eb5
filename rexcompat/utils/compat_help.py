"""Rewrite rules shown in the help modal."""

COMPAT_HELP = {
    "Named groups": {
        "(?<name>...)": "Becomes a plain capturing group (...)",
        "\\k<name>": "Becomes \\N, N = first-seen position of name",
    },
    "Lookbehind (lossy)": {
        "(?<=...)": "Removed with its contents",
        "(?<!...)": "Removed with its contents",
        "unbalanced": "Opening token becomes (?:",
    },
    "Untouched": {
        "(?=...)": "Positive lookahead",
        "(?!...)": "Negative lookahead",
        "\\1": "Positional backreference",
    },
    "Keys": {
        "F1": "Show this help",
        "c": "Copy rewritten pattern",
        "n / N": "Next / previous match",
        "Esc": "Quit",
    },
}
