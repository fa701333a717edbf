"""Services subpackage - product form flows."""
