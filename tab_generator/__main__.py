"""Entry point wrapper for ``python -m tab_generator``.

Execution is forwarded to :func:`tab_generator.main` so the module form and
the installed ``tab-generator`` console script behave identically.

Example
-------
::

    python -m tab_generator --instrument guitar --key E --scale Dorian
"""

from . import main

if __name__ == "__main__":
    main()
