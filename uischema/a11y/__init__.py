"""Advisory accessibility checks over UI trees."""

from uischema.a11y.lib import A11yIssue, validate_a11y

__all__ = ["A11yIssue", "validate_a11y"]
