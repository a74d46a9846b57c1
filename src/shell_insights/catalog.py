"""Static catalog of tools probed on the host and looked for in history.

Each entry names the probe command used to decide whether the tool is
installed, its kind, and the substrings that attribute a history command to
it. Entries are matched in catalog order.
"""

from .core import ToolSpec

TOOL_CATALOG: tuple[ToolSpec, ...] = (
    # Programming languages
    ToolSpec("python", "python --version", "language", package_manager="pip"),
    ToolSpec("python3", "python3 --version", "language"),
    ToolSpec("node", "node --version", "language", package_manager="npm"),
    ToolSpec("go", "go version", "language", package_manager="go get"),
    ToolSpec("java", "java -version", "language"),
    ToolSpec("ruby", "ruby --version", "language", package_manager="gem"),
    ToolSpec("php", "php --version", "language", package_manager="composer"),
    ToolSpec("rust", "rustc --version", "language", invocation="rustc", package_manager="cargo"),
    ToolSpec("perl", "perl --version", "language"),
    ToolSpec("scala", "scala -version", "language"),
    ToolSpec("kotlin", "kotlin -version", "language"),
    ToolSpec("swift", "swift --version", "language"),
    ToolSpec("r", "R --version", "language", invocation="Rscript"),
    ToolSpec("julia", "julia --version", "language"),
    ToolSpec("haskell", "ghc --version", "language", invocation="ghc"),
    ToolSpec("elixir", "elixir --version", "language"),
    ToolSpec("erlang", "erl -version", "language", invocation="erl "),
    ToolSpec("clang", "clang --version", "language"),
    ToolSpec("gcc", "gcc --version", "language"),
    ToolSpec("dotnet", "dotnet --version", "language"),
    ToolSpec("lua", "lua -v", "language"),
    ToolSpec("ocaml", "ocaml -version", "language"),
    ToolSpec("dart", "dart --version", "language"),
    ToolSpec("zig", "zig version", "language"),
    ToolSpec("nim", "nim --version", "language"),

    # Build tools & package managers
    ToolSpec("maven", "mvn --version", "build", invocation="mvn"),
    ToolSpec("gradle", "gradle --version", "build"),
    ToolSpec("make", "make --version", "build"),
    ToolSpec("npm", "npm --version", "build"),
    ToolSpec("yarn", "yarn --version", "build"),
    ToolSpec("pnpm", "pnpm --version", "build"),
    ToolSpec("pip", "pip --version", "build"),
    ToolSpec("cargo", "cargo --version", "build"),
    ToolSpec("composer", "composer --version", "build"),
    ToolSpec("bundler", "bundle --version", "build", invocation="bundle"),

    # DevOps & cloud
    ToolSpec("docker", "docker --version", "devops"),
    ToolSpec("kubectl", "kubectl version --client", "devops"),
    ToolSpec("terraform", "terraform version", "devops"),
    ToolSpec("ansible", "ansible --version", "devops"),
    ToolSpec("vagrant", "vagrant --version", "devops"),
    ToolSpec("helm", "helm version", "devops"),
    ToolSpec("aws", "aws --version", "devops", invocation="aws "),
    ToolSpec("gcloud", "gcloud --version", "devops"),
    ToolSpec("azure", "az --version", "devops", invocation="az "),

    # Version control
    ToolSpec("git", "git --version", "vcs"),
    ToolSpec("svn", "svn --version", "vcs"),
    ToolSpec("mercurial", "hg --version", "vcs", invocation="hg "),

    # Databases
    ToolSpec("mysql", "mysql --version", "database"),
    ToolSpec("psql", "psql --version", "database"),
    ToolSpec("mongodb", "mongod --version", "database", invocation="mongo"),
    ToolSpec("redis", "redis-cli --version", "database", invocation="redis-cli"),

    # Web servers & tools
    ToolSpec("nginx", "nginx -v", "web"),
    ToolSpec("apache2", "apache2 -v", "web"),
    ToolSpec("curl", "curl --version", "web"),
    ToolSpec("wget", "wget --version", "web"),

    # Editors
    ToolSpec("vim", "vim --version", "editor"),
    ToolSpec("nvim", "nvim --version", "editor"),
    ToolSpec("emacs", "emacs --version", "editor"),
    ToolSpec("code", "code --version", "editor", invocation="code "),

    # Shells & terminal tools
    ToolSpec("zsh", "zsh --version", "shell"),
    ToolSpec("bash", "bash --version", "shell"),
    ToolSpec("fish", "fish --version", "shell"),
    ToolSpec("tmux", "tmux -V", "shell"),
)

# Kinds that feed the ToolUsage summary.
EDITOR_KIND = "editor"
LANGUAGE_KIND = "language"
BUILD_KIND = "build"
