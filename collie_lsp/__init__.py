"""Language server for yacc/bison style grammar files.

The server sits between an editor and a Grammar Engine (parse, lint, format,
autocorrect) and turns engine results into Language Server Protocol
responses.  The package is organised as follows:

* ``state`` – the per-URI document store.
* ``dispatcher`` – the fixed method table and the failure boundary.
* ``text`` / ``symbols`` – raw-text scanners and the AST backed symbol index
  shared by every position based feature.
* ``engine`` – the validated boundary to the external Grammar Engine.
* ``handlers`` – one module per protocol capability.
* ``server`` – the pygls binding used when serving over stdio or TCP.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
