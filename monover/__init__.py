"""Resolve next release and prerelease versions for monorepo subprojects."""
