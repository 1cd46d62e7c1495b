"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable:
wire-format tokens of the symbol line grammar and Go toolchain conventions.

For configurable values, see models.py (LoggingConfig, SearchPathConfig, ScanOptions).
"""

# =============================================================================
# Symbol line format
# =============================================================================

UNIVERSE_PACKAGE = "universe"
"""referPkg sentinel for predeclared (universe scope) symbols."""

LOCAL_MARKER = "local"
"""Prefix marking a function-local referenced object."""

DEFINITION_MARKER = "+"
"""Suffix marking an occurrence that is its own declaration."""

# =============================================================================
# Go toolchain conventions
# =============================================================================

GO_FILE_SUFFIX = ".go"
GO_TEST_FILE_SUFFIX = "_test.go"

LOCAL_IMPORT_PREFIX = "_"
"""Import path prefix Go uses for packages outside every search root."""

GOPATH_ENTRY_SUBDIR = "src"
"""Each GOPATH entry contributes <entry>/src as a search root."""

GOROOT_SUBDIR = "src"
"""GOROOT contributes <GOROOT>/src as a search root."""

# =============================================================================
# Resolver limits
# =============================================================================

MAX_RESOLVE_DEPTH = 48
"""Nested resolution steps before a lookup gives up (guards cyclic declarations)."""

MAX_EMBED_DEPTH = 8
"""Embedded struct/interface levels searched during member lookup."""

CGO_PSEUDO_PACKAGE = "C"
"""Import path of cgo's pseudo-package; it has no source to load."""
