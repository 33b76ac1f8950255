"""Package entry point for ``python -m greek_hyphen``.

WHY: Users run the hyphenator as ``python -m greek_hyphen ΚΕΙΜΕΝΟ`` without
installing the console script.

HOW: Delegates to the CLI's main() function.
"""

from greek_hyphen.cli import main

if __name__ == "__main__":
    main()
