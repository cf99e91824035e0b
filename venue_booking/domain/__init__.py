"""Pure booking rules: lifecycle transitions and slot availability."""
