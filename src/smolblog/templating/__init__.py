"""Template set construction over kida.

Layout files from the manifest become one named-template collection
with a single helper global, ``renderMarkdown``.
"""

from smolblog.templating.integration import TemplateSet, build_template_set, create_environment

__all__ = [
    "TemplateSet",
    "build_template_set",
    "create_environment",
]
