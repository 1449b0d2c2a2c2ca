"""Script de ejecución.

Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo,
además del script `orderlink` instalado por el paquete.
"""

from __future__ import annotations

import sys

# Terminales Windows con cp1252 fallan al imprimir caracteres UTF-8 de Rich.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
