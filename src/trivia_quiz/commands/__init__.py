"""Subcommands dispatched by ``trivia``; each module exposes ``main(argv)``."""
