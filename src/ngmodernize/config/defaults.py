"""Starter .ngmodernize.toml template written by ``ngmodernize init``."""

DEFAULT_TOML = """\
# ngmodernize configuration
version = "1.0"

[migration]
mode = "analyze"          # analyze | migrate | dry-run
# exclude = ["environments/", ".spec.ts"]   # substring patterns, transform step only
# include = ["app/"]                        # empty = every discovered file
generate_report = false
backup = true
auto_apply = false

[manifest]
core_package = "@angular/core"
expected_major = "20"
# obsolete_packages = ["@angular/http", "rxjs-compat"]

[transform]
form_group_type = "Record<string, AbstractControl>"
form_control_type = "string | null"
inject_readonly = false

[rules]
# enable = ["CONSTRUCTOR_INJECTION"]   # empty = all enabled
# disable = ["DEPRECATED_PIPE_JSON"]

[output]
format = "terminal"       # terminal | json | markdown | html
directory = "migration-reports"
report_formats = ["html", "json", "markdown"]
show_diff = false

[batch]
delay_seconds = 0
"""
