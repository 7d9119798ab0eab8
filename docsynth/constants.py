"""Static tables used to decide which files describe a project."""

from __future__ import annotations

SKIP_DIRECTORIES: frozenset[str] = frozenset(
    name.lower()
    for name in (
        # build outputs
        "target", "build", "dist", "out", "bin", "obj", "Debug", "Release",
        ".build", "_build", "builds", "output", "artifacts",
        # dependencies and package managers
        "node_modules", "vendor", "packages", ".yarn", ".pnp",
        "__pycache__", ".mypy_cache", ".pytest_cache", "site-packages",
        ".virtualenv", "venv", ".venv", "env", ".env", "virtualenv",
        "Pods", "DerivedData", "xcuserdata", ".gradle",
        # version control and editors
        ".git", ".svn", ".hg", ".bzr", "_darcs",
        ".vscode", ".idea", ".vs", ".eclipse", ".sublime-text",
        # temporary files and caches
        "tmp", "temp", ".tmp", ".cache", "cache", "logs", "log",
        ".DS_Store", "Thumbs.db", ".sass-cache", ".parcel-cache",
        # documentation builds
        "_site", ".jekyll-cache", ".next", ".nuxt", ".docusaurus",
        # coverage reports
        "coverage", "htmlcov", ".nyc_output", ".coverage",
    )
)

IMPORTANT_HIDDEN_DIRECTORIES: frozenset[str] = frozenset({".github", ".gitlab"})

SKIP_DIRECTORY_FRAGMENTS: tuple[str, ...] = ("cache", "temp", "tmp")
SKIP_DIRECTORY_SUFFIXES: tuple[str, ...] = ("_modules", "_cache")

SKIP_FILE_PATTERNS: tuple[str, ...] = (
    # lock files
    "package-lock.json", "yarn.lock", "pnpm-lock.yaml", "cargo.lock",
    "pipfile.lock", "poetry.lock", "composer.lock", "gemfile.lock", "*.lock",
    # build artifacts
    "*.min.js", "*.bundle.js", "*.chunk.js", "*.map",
    "*.pyc", "*.pyo", "*.class", "*.jar", "*.war",
    "*.exe", "*.dll", "*.so", "*.dylib", "*.a", "*.lib", "*.o",
    # editor and OS files
    ".ds_store", "thumbs.db", "*.swp", "*.swo", "*~",
    "*.bak", "*.orig", "*.rej",
    # logs and temporary files
    "*.log", "*.tmp", "*.temp",
)

IMPORTANT_FILES: frozenset[str] = frozenset(
    name.lower()
    for name in (
        "Cargo.toml", "package.json", "pyproject.toml", "setup.py", "requirements.txt",
        "Dockerfile", "docker-compose.yml", "docker-compose.yaml",
        "Makefile", "CMakeLists.txt", "build.gradle", "pom.xml",
        "go.mod", "go.sum", "composer.json",
        "README", "README.md", "README.txt", "LICENSE", "CHANGELOG.md",
    )
)

EXTENSIONLESS_SCRIPTS: frozenset[str] = frozenset(
    {"dockerfile", "rakefile", "gruntfile", "gulpfile"}
)

CONFIG_EXTENSIONS: frozenset[str] = frozenset({"toml", "json", "yaml", "yml"})

SOURCE_ROOT_SEGMENTS: frozenset[str] = frozenset({"src", "main"})

ENTRYPOINT_STEM_HINTS: tuple[str, ...] = ("main", "index", "app")

MAX_FILE_BYTES = 1_000_000
BINARY_SNIFF_BYTES = 8

# Lowercase; callers lowercase the suffix before lookup.
CODE_EXTENSIONS: frozenset[str] = frozenset(
    {
        "rs",
        "py", "pyx", "pyi", "pyw",
        "js", "jsx", "ts", "tsx", "mjs", "cjs",
        "java", "kt", "kts", "scala", "groovy", "clj", "cljs",
        "c", "cc", "cpp", "cxx", "c++", "h", "hh", "hpp", "hxx", "h++",
        "cs", "csx",
        "go",
        "php", "php3", "php4", "php5", "phtml",
        "rb", "rbw", "rake", "gemspec",
        "swift",
        "m", "mm",
        "pl", "pm", "t", "pod",
        "sh", "bash", "zsh", "fish", "csh", "tcsh", "ksh",
        "ps1", "psm1", "psd1",
        "bat", "cmd",
        "r", "rmd",
        "mlx",
        "lua",
        "dart",
        "hs", "lhs",
        "erl", "hrl", "ex", "exs",
        "fs", "fsx", "fsi",
        "vb", "vbs",
        "asm", "s",
        "f", "f90", "f95", "f03", "f08",
        "cob", "cbl",
        "pas", "pp",
        "adb", "ads",
        "d",
        "nim", "nims",
        "cr",
        "zig",
        "jl",
        "ml", "mli",
        "re", "rei",
        "elm",
        "purs",
        "rkt",
        "scm", "ss",
        "lisp", "lsp", "l", "cl",
        "sql", "psql", "mysql",
        "html", "htm", "xhtml", "xml", "xsl", "xslt",
        "css", "scss", "sass", "less", "styl",
        "vue", "svelte",
        "json", "jsonc", "yaml", "yml", "toml", "ini", "cfg", "conf",
        "env", "properties", "plist",
        "md", "markdown", "rst", "txt", "tex", "org", "adoc", "asciidoc",
        "erb", "haml", "slim", "pug", "jade",
        "gradle", "sbt", "cmake", "make", "makefile", "dockerfile",
        "jenkinsfile", "vagrantfile", "gemfile", "podfile",
        "gitignore", "gitattributes",
        "proto", "graphql", "gql", "sol", "cairo", "move",
    }
)


__all__ = [
    "BINARY_SNIFF_BYTES",
    "CODE_EXTENSIONS",
    "CONFIG_EXTENSIONS",
    "ENTRYPOINT_STEM_HINTS",
    "EXTENSIONLESS_SCRIPTS",
    "IMPORTANT_FILES",
    "IMPORTANT_HIDDEN_DIRECTORIES",
    "MAX_FILE_BYTES",
    "SKIP_DIRECTORIES",
    "SKIP_DIRECTORY_FRAGMENTS",
    "SKIP_DIRECTORY_SUFFIXES",
    "SKIP_FILE_PATTERNS",
    "SOURCE_ROOT_SEGMENTS",
]
