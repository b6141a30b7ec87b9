from .export import build_sarif, rule_id

__all__ = ["build_sarif", "rule_id"]
