"""Go objects, types, scopes and the type resolver."""
