#!/usr/bin/env python3
"""Generate API reference pages for the beaut package."""

import ast
from pathlib import Path

import mkdocs_gen_files

root = Path(__file__).parent.parent.parent
package = 'beaut'
src = root / 'src' / package


def get_module_description(module_path: Path) -> str:
    """Return the first line of a module's docstring, or an empty string."""
    try:
        tree = ast.parse(module_path.read_text(encoding='utf-8'))
    except (OSError, SyntaxError):
        return ''
    docstring = ast.get_docstring(tree) or ''
    return ' '.join(docstring.strip().splitlines()[:1])


def is_public(path: Path) -> bool:
    """Skip private modules (any path component starting with a single underscore)."""
    parts = path.relative_to(src).parts
    return not any(part.startswith('_') and not part.startswith('__') for part in parts)


modules: list[tuple[tuple[str, ...], Path]] = []
for path in sorted(src.rglob('*.py')):
    if not is_public(path):
        continue
    parts = path.relative_to(src).with_suffix('').parts
    if parts[-1] == '__init__':
        parts = parts[:-1]
    modules.append((parts, path))

# Reference index with one row per public module
with mkdocs_gen_files.open('reference/index.md', 'w') as index:
    index.write('# API Reference\n\n')
    index.write(f'::: {package}\n')
    index.write('    options:\n')
    index.write('      show_submodules: false\n\n')
    index.write('| Module | Description |\n')
    index.write('|--------|-------------|\n')
    for parts, path in modules:
        if not parts:
            continue
        ident = '.'.join((package, *parts))
        index.write(f'| [{ident}]({"/".join(parts)}.md) | {get_module_description(path)} |\n')
    index.write('\n')

# One page per public module
for parts, path in modules:
    if not parts:
        continue
    ident = '.'.join((package, *parts))
    doc_path = Path('reference', *parts).with_suffix('.md')
    with mkdocs_gen_files.open(doc_path, 'w') as fd:
        fd.write(f'# `{ident}`\n\n')
        fd.write(f'::: {ident}\n')
        fd.write('    options:\n')
        fd.write('      members: true\n')
        fd.write('      show_source: true\n\n')
    mkdocs_gen_files.set_edit_path(doc_path, path)

with mkdocs_gen_files.open('reference/SUMMARY.md', 'w') as nav_file:
    nav_file.write('* [API Reference](index.md)\n')
    for parts, _ in modules:
        if parts:
            nav_file.write(f'  * [{".".join(parts)}]({"/".join(parts)}.md)\n')
