"""Built-in operation modules.

Each public module here is discovered by the scanner through its header
comment block; modules starting with an underscore are shared helpers.
"""
