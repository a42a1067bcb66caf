"""Tests for the pattern detector and built-in rules."""

import textwrap

import pytest

from ngmodernize.config.schema import ModernizeConfig
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.registry import CUSTOM_RULES_DIRNAME, build_registry
from ngmodernize.scanner.detector import detect, line_number_at


@pytest.fixture
def registry():
    return build_registry()


def _ids(issues):
    return [i.rule_id for i in issues]


class TestLineNumbers:
    def test_single_line(self):
        assert line_number_at("abc", 1) == 1

    def test_multi_line(self):
        content = "one\ntwo\nthree\n"
        assert line_number_at(content, content.index("three")) == 3

    def test_crafted_template(self, make_file, registry):
        content = "<p>intro</p>\n\n\n<div *ngIf=\"ready\">ok</div>\n"
        issues = detect(make_file("src/a.component.html", content), registry)
        assert [(i.rule_id, i.line_number) for i in issues] == [("LEGACY_NG_IF", 4)]


class TestComponentRules:
    def test_constructor_injection(self, make_file, registry):
        f = make_file(
            "src/app/a.component.ts",
            "@Component({ standalone: true })\nexport class A {\n"
            "  constructor(private svc: MyService) {}\n}\n",
        )
        issues = detect(f, registry)
        assert _ids(issues) == ["CONSTRUCTOR_INJECTION"]
        issue = issues[0]
        assert issue.severity == Severity.SUGGESTION
        assert issue.kind == IssueKind.DEPRECATED_API
        assert "inject()" in issue.message
        assert issue.line_number == 3
        assert issue.matched_text == "constructor(private svc: MyService)"

    def test_constructor_without_modifiers_is_ignored(self, make_file, registry):
        f = make_file(
            "src/app/a.component.ts",
            "@Component({ standalone: true })\nclass A { constructor(svc: MyService) {} }",
        )
        assert "CONSTRUCTOR_INJECTION" not in _ids(detect(f, registry))

    def test_constructor_with_inject_decorator(self, make_file, registry):
        f = make_file(
            "src/app/a.component.ts",
            "@Component({ standalone: true })\nclass A {\n"
            "  constructor(@Inject(API_URL) private url: string) {}\n}",
        )
        assert "CONSTRUCTOR_INJECTION" in _ids(detect(f, registry))

    def test_full_component(self, make_file, registry, sample_component):
        issues = detect(make_file("src/app/user.component.ts", sample_component), registry)
        assert sorted(_ids(issues)) == sorted([
            "CONSTRUCTOR_INJECTION",
            "COMPONENT_NOT_STANDALONE",
            "UNTYPED_FORM_GROUP",
            "UNTYPED_FORM_CONTROL",
            "DEPRECATED_HTTP_IMPORT",
            "RXJS_DEEP_IMPORT",
        ])
        by_id = {i.rule_id: i for i in issues}
        assert by_id["CONSTRUCTOR_INJECTION"].line_number == 15
        assert by_id["UNTYPED_FORM_GROUP"].severity == Severity.WARNING
        assert by_id["UNTYPED_FORM_GROUP"].kind == IssueKind.UNTYPED_CONSTRUCT
        assert by_id["RXJS_DEEP_IMPORT"].message == "Obsolete import: rxjs/operators"

    def test_standalone_guard(self, make_file, registry):
        f = make_file("src/a.component.ts", "@Component({\n  standalone: true,\n})\nclass A {}")
        assert detect(f, registry) == []

    def test_ngmodule_inside_component(self, make_file, registry):
        f = make_file(
            "src/a.component.ts",
            "@Component({ standalone: true })\nclass A {}\n@NgModule({})\nclass M {}",
        )
        issues = detect(f, registry)
        assert _ids(issues) == ["NGMODULE_IN_COMPONENT"]
        assert issues[0].severity == Severity.INFO


class TestServiceRules:
    def test_full_service(self, make_file, registry, sample_service):
        issues = detect(make_file("src/app/user.service.ts", sample_service), registry)
        by_id = {i.rule_id: i for i in issues}
        assert set(by_id) == {
            "CONSTRUCTOR_INJECTION",
            "SERVICE_NOT_PROVIDED_IN_ROOT",
            "HARDCODED_BACKEND_URL",
            "RXJS_DEEP_IMPORT",
        }
        url = by_id["HARDCODED_BACKEND_URL"]
        assert url.kind == IssueKind.BACKEND_INTEGRATION_NOTE
        assert url.line_number == 7
        assert "http://localhost:8080/api" in url.message

    def test_provided_in_root_guard(self, make_file, registry):
        f = make_file(
            "src/a.service.ts", "@Injectable({ providedIn: 'root' })\nexport class A {}"
        )
        assert detect(f, registry) == []


class TestTemplateRules:
    def test_scenario_legacy_if(self, make_file, registry):
        issues = detect(make_file("src/a.component.html", '<div *ngIf="cond">x</div>'), registry)
        assert len(issues) == 1
        assert issues[0].severity == Severity.SUGGESTION
        assert issues[0].matched_text == '*ngIf="cond"'
        assert "@if" in issues[0].suggestion

    def test_one_issue_per_occurrence(self, make_file, registry, sample_template):
        issues = detect(make_file("src/app/user.component.html", sample_template), registry)
        ids = _ids(issues)
        assert ids.count("LEGACY_NG_IF") == 1
        assert ids.count("LEGACY_NG_FOR") == 1
        assert ids.count("LEGACY_NG_SWITCH") == 3
        assert ids.count("DEPRECATED_PIPE_JSON") == 1
        suggestions = {i.rule_id: i.suggestion for i in issues}
        assert "@for" in suggestions["LEGACY_NG_FOR"]
        assert "@switch" in suggestions["LEGACY_NG_SWITCH"]

    def test_async_pipe(self, make_file, registry):
        issues = detect(make_file("src/a.html", "<p>{{ user$ | async }}</p>"), registry)
        assert _ids(issues) == ["DEPRECATED_PIPE_ASYNC"]
        assert issues[0].severity == Severity.INFO


class TestModuleAndRoutingRules:
    def test_module(self, make_file, registry, sample_module):
        issues = detect(make_file("src/app/app.module.ts", sample_module), registry)
        assert _ids(issues).count("NGMODULE_DECLARATION") == 1
        assert _ids(issues).count("HTTP_CLIENT_MODULE") == 2
        ngmodule = next(i for i in issues if i.rule_id == "NGMODULE_DECLARATION")
        assert ngmodule.line_number == 6
        assert ngmodule.severity == Severity.WARNING

    def test_routing(self, make_file, registry, sample_routing):
        issues = detect(make_file("src/app/app-routing.module.ts", sample_routing), registry)
        assert "ROUTER_MODULE_FOR_ROOT" in _ids(issues)
        router = next(i for i in issues if i.rule_id == "ROUTER_MODULE_FOR_ROOT")
        assert "provideRouter" in router.suggestion

    def test_general_rules_for_other_files(self, make_file, registry):
        content = "import 'rxjs/add/operator/map';\nimport { Observable } from \"rxjs/Observable\";\n"
        issues = detect(make_file("src/polyfills.ts", content), registry)
        assert _ids(issues) == ["RXJS_DEEP_IMPORT", "RXJS_PATCH_IMPORT"]


class TestManifestInspection:
    def test_scenario_core_version(self, make_file, registry):
        f = make_file("package.json", '{"dependencies": {"@angular/core": "5.2.0"}}')
        issues = detect(f, registry)
        assert len(issues) == 1
        assert issues[0].severity == Severity.ERROR
        assert issues[0].kind == IssueKind.VERSION_INCOMPATIBILITY
        assert issues[0].line_number == 1

    def test_matching_major_is_clean(self, make_file, registry):
        f = make_file("package.json", '{"dependencies": {"@angular/core": "^20.1.0"}}')
        assert detect(f, registry) == []

    def test_obsolete_packages(self, make_file, registry, sample_manifest):
        issues = detect(make_file("package.json", sample_manifest), registry)
        by_id = {i.rule_id: i for i in issues}
        assert set(by_id) == {"CORE_VERSION_MISMATCH", "OBSOLETE_PACKAGE"}
        assert by_id["CORE_VERSION_MISMATCH"].line_number == 5
        assert by_id["OBSOLETE_PACKAGE"].line_number == 7
        assert by_id["OBSOLETE_PACKAGE"].severity == Severity.WARNING
        assert by_id["OBSOLETE_PACKAGE"].matched_text == "@angular/http"

    def test_scenario_invalid_json(self, make_file, registry):
        issues = detect(make_file("package.json", '{"dependencies": {'), registry)
        assert len(issues) == 1
        assert issues[0].severity == Severity.ERROR
        assert issues[0].line_number is None

    def test_expected_major_from_config(self, make_file):
        cfg = ModernizeConfig()
        cfg.manifest.expected_major = "5"
        f = make_file("package.json", '{"dependencies": {"@angular/core": "~5.2.0"}}')
        assert detect(f, build_registry(cfg), cfg) == []

    def test_dev_dependency_counts(self, make_file, registry):
        f = make_file("package.json", '{"devDependencies": {"rxjs-compat": "6.0.0"}}')
        assert _ids(detect(f, registry)) == ["OBSOLETE_PACKAGE"]


class TestDetectorContract:
    def test_never_mutates_content(self, make_file, registry, sample_component):
        f = make_file("src/app/user.component.ts", sample_component)
        detect(f, registry)
        assert f.content == sample_component

    def test_disabled_rule_is_silent(self, make_file, sample_template):
        cfg = ModernizeConfig()
        cfg.rules.disable = ["LEGACY_NG_SWITCH"]
        issues = detect(make_file("src/a.html", sample_template), build_registry(cfg), cfg)
        assert "LEGACY_NG_SWITCH" not in _ids(issues)

    def test_default_registry(self, make_file):
        issues = detect(make_file("src/a.html", textwrap.dedent('<p *ngFor="let x of xs">{{x}}</p>')))
        assert _ids(issues) == ["LEGACY_NG_FOR"]

    def test_custom_rule_with_literal_braces(self, make_file, tmp_path, sample_template):
        rules_dir = tmp_path / CUSTOM_RULES_DIRNAME
        rules_dir.mkdir()
        (rules_dir / "braces.yaml").write_text(
            "id: TITLE_BINDING\n"
            "pattern: '\\{\\{ title \\}\\}'\n"
            "file_types: [template]\n"
            "message: 'use {} instead'\n"
        )
        issues = detect(make_file("src/a.html", sample_template), build_registry(project_root=tmp_path))
        (custom,) = [i for i in issues if i.rule_id == "TITLE_BINDING"]
        assert custom.message == "use {} instead"
        assert "LEGACY_NG_FOR" in _ids(issues)
