"""
Generators — produce template files for the project root.

Each generator module exposes a ``generate_*()`` function that returns
a list of ``TemplateFile`` instances.
"""
