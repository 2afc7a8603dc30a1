"""age-github — GitHub handle recipients for the age encryption tool.

Rewrites ``-r @username`` recipients into the user's first published
SSH key and hands control over to ``age``.
"""

from age_github.version import __version__

__all__: list[str] = ["__version__"]
