"""yaml-fm-lint: lint and auto-fix YAML front matter in text documents."""

__version__ = "1.0.0"
