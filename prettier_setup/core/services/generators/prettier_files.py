"""
Prettier template files — .prettierrc and .prettierignore.

Static content; the pipeline copies these into the project root.
"""

from __future__ import annotations

from prettier_setup.core.models.template import TemplateFile


_PRETTIERRC = """\
{
  "singleQuote": true,
  "printWidth": 100,
  "trailingComma": "es5",
  "endOfLine": "auto"
}
"""

_PRETTIERIGNORE = """\
# ── Dependencies ────────────────────────────────────────────────
node_modules
package-lock.json
yarn.lock
pnpm-lock.yaml

# ── Build output ────────────────────────────────────────────────
dist
tmp
out-tsc
coverage

# ── Tooling ─────────────────────────────────────────────────────
.angular
.husky
"""


def generate_prettier_files() -> list[TemplateFile]:
    """Template files for a Prettier setup, in write order."""
    return [
        TemplateFile(
            path=".prettierrc",
            content=_PRETTIERRC,
            description="Prettier formatting options",
        ),
        TemplateFile(
            path=".prettierignore",
            content=_PRETTIERIGNORE,
            description="Paths Prettier should not format",
        ),
    ]
