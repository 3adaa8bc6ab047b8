"""Permite executar com `python -m weather_cli`"""
import sys

from weather_cli.infrastructure.adapters.input.cli import main

if __name__ == '__main__':
    sys.exit(main())
