"""
Default Configuration

Written to the user config file on first run.
"""

DEFAULT_CONFIG = {
    "filetypes": {
        # Double-slash comments
        "rs,go,js,jsx,ts,tsx,java,kt,scala,swift,dart,cs,c,h,cpp,hpp,cc,php": {
            "before_line": "// "
        },

        # Hash-style comments
        "py,sh,bash,zsh,rb,pl,r,yaml,yml,toml,ex,exs,nix": {
            "before_line": "# "
        },

        # Double-dash comments
        "lua,sql,hs,elm": {
            "before_line": "-- "
        },

        # Block comments
        "css,scss,less": {
            "before_block": "/*",
            "before_line": " * ",
            "after_block": " */"
        },
        "html,xml,vue,svelte": {
            "before_block": "<!--",
            "after_block": "-->"
        },

        # Markdown usually carries no header; opt in from a local config
        "md": {
            "enable": False,
            "before_block": "<!--",
            "after_block": "-->"
        }
    }
}
