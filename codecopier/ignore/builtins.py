"""Hardcoded exclusion lists that custom rules can never override."""

from __future__ import annotations

from dataclasses import dataclass

IGNORED_DIRS: frozenset[str] = frozenset(
    {
        # version control
        ".git", ".svn", ".hg",
        # editors and IDEs
        ".idea", ".vscode", ".vs", ".settings", ".project", ".classpath", "nbproject",
        # scratch
        "Trash", "tmp", "temp",
        # javascript dependencies
        "node_modules", "bower_components", "jspm_packages", ".npm", ".yarn",
        # python environments and caches
        "__pycache__", "venv", ".venv", "env", ".env", "pip-wheel-metadata",
        ".pytest_cache", ".mypy_cache", ".ipynb_checkpoints", ".langgraph_api",
        # build output
        "dist", "build", "out", "target", "bin", "obj", "pkg", "_build", "deps",
        ".next", ".nuxt", ".output", ".docusaurus", "public", "static",
        # jvm / apple toolchains
        ".gradle", "gradle", ".m2", "Pods", "DerivedData", ".xcworkspace",
        # deployment tooling
        "vendor", ".bundle", ".terraform", ".serverless", ".aws-sam", ".vercel", ".netlify",
        # reports and logs
        "coverage", ".nyc_output", "test-results", "logs", "log",
    }
)

IGNORED_FILENAMES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "Gemfile.lock",
        "composer.lock",
        "Cargo.lock",
        ".DS_Store",
        "Thumbs.db",
        "desktop.ini",
    }
)

IGNORED_EXTENSIONS: tuple[str, ...] = (
    # images
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp", ".bmp", ".tiff", ".heic",
    # audio / video
    ".mp3", ".mp4", ".mov", ".avi", ".wav", ".flac", ".mkv", ".webm",
    # 3d assets and fonts
    ".obj", ".fbx", ".blend", ".woff", ".woff2", ".ttf", ".eot", ".otf",
    # archives and packages
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz", ".jar", ".war", ".ear",
    ".apk", ".aab", ".ipa", ".gem",
    # native and bytecode artifacts
    ".exe", ".dll", ".so", ".dylib", ".bin", ".o", ".a", ".class", ".pyc", ".pyo", ".pyd",
    # office documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt", ".rtf",
    # design files
    ".psd", ".ai", ".eps", ".indd", ".sketch", ".fig",
    # databases
    ".db", ".sqlite", ".sqlite3", ".mdb", ".accde", ".frm", ".ibd",
    # source maps
    ".map",
    # keys and certificates
    ".pem", ".crt", ".key", ".p12", ".pfx", ".keystore", ".jks",
    # lock files
    ".lock",
)


@dataclass(frozen=True)
class Builtins:
    """Built-in exclusion lists applied before any custom rule."""

    dirs: frozenset[str] = IGNORED_DIRS
    filenames: frozenset[str] = IGNORED_FILENAMES
    extensions: tuple[str, ...] = IGNORED_EXTENSIONS

    def is_ignored_dir(self, name: str) -> bool:
        return name in self.dirs

    def is_binary_name(self, name: str) -> bool:
        """Return whether a file name is excluded by exact name or extension."""
        if name in self.filenames:
            return True
        return name.lower().endswith(self.extensions)


DEFAULT_BUILTINS = Builtins()


__all__ = [
    "IGNORED_DIRS",
    "IGNORED_FILENAMES",
    "IGNORED_EXTENSIONS",
    "Builtins",
    "DEFAULT_BUILTINS",
]
