"""Tests for the template control-flow migration."""

import logging

import pytest

from ngmodernize.errors import TemplateStructureError
from ngmodernize.transformer.control_flow import (
    find_element_close,
    iter_tags,
    migrate_template,
    parse_for,
    parse_if,
)
from ngmodernize.transformer.engine import transform


def _balanced(text: str) -> bool:
    return text.count("{") == text.count("}")


class TestTagScanner:
    def test_skips_comments_and_interpolation(self):
        text = "<!-- <b> --><p>{{ a < b }}</p>"
        assert [(t.name, t.closing) for t in iter_tags(text)] == [("p", False), ("p", True)]

    def test_quoted_gt_inside_attribute(self):
        (tag, _) = list(iter_tags('<div title="a > b"></div>'))
        assert tag.end == len('<div title="a > b">')

    def test_nested_same_name(self):
        text = "<div><div></div></div>"
        first = next(iter_tags(text))
        assert find_element_close(text, first).start == len("<div><div></div>")

    def test_unclosed(self):
        text = "<div><div></div>"
        assert find_element_close(text, next(iter_tags(text))) is None


class TestExpressions:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("cond", ("cond", None, None)),
            ("cond; else empty", ("cond", None, "empty")),
            ("cond; then a else b", ("cond", "a", "b")),
            ("user$ | async as user", ("user$ | async; as user", None, None)),
        ],
    )
    def test_parse_if(self, value, expected):
        assert parse_if(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("let x of xs", "x of xs; track x"),
            ("let x of xs; let i = index", "x of xs; track x; let i = $index"),
            ("let x of xs; index as i, let f = first", "x of xs; track x; let i = $index, f = $first"),
            ("let x of xs; trackBy: byId", "x of xs; track byId($index, x)"),
        ],
    )
    def test_parse_for(self, value, expected):
        assert parse_for(value) == expected

    def test_parse_for_rejects_garbage(self):
        with pytest.raises(TemplateStructureError):
            parse_for("x in xs")


class TestMigrateTemplate:
    def test_scenario_simple_if(self):
        text, count = migrate_template('<div *ngIf="cond">x</div>')
        assert count == 1
        assert text == "@if (cond) {\n  <div>x</div>\n}"
        assert "*ngIf" not in text

    def test_nested_if_closes_at_its_element(self):
        text, count = migrate_template('<div *ngIf="a"><div *ngIf="b">x</div></div>')
        assert count == 2
        assert text == "@if (a) {\n  <div>@if (b) {<div>x</div>}</div>\n}"

    def test_for_with_trackby(self):
        text, _ = migrate_template(
            '<li *ngFor="let item of items; trackBy: trackById">{{ item }}</li>'
        )
        assert text == "@for (item of items; track trackById($index, item)) {\n  <li>{{ item }}</li>\n}"

    def test_bare_container_is_dropped(self):
        text, _ = migrate_template('<ng-container *ngIf="show">text</ng-container>')
        assert text == "@if (show) {text}"

    def test_then_else_templates(self):
        text, _ = migrate_template('<div *ngIf="ok; then yes else no"></div>')
        assert text == (
            '@if (ok) {\n  <ng-container *ngTemplateOutlet="yes"></ng-container>\n}'
            ' @else {\n  <ng-container *ngTemplateOutlet="no"></ng-container>\n}'
        )

    def test_void_element(self):
        text, _ = migrate_template('<img *ngIf="src" [src]="src">')
        assert text == '@if (src) {\n  <img [src]="src">\n}'

    def test_commented_directive_untouched(self):
        source = '<!-- <div *ngIf="x"></div> -->'
        assert migrate_template(source) == (source, 0)

    def test_unmatched_element_left_alone(self, caplog):
        source = '<div *ngIf="a">no close'
        with caplog.at_level(logging.WARNING, logger="ngmodernize"):
            text, count = migrate_template(source, path="broken.html")
        assert (text, count) == (source, 0)
        assert any("broken.html" in r.getMessage() for r in caplog.records)

    def test_full_template(self, sample_template):
        text, count = migrate_template(sample_template)
        assert count == 5
        for fragment in (
            "@if (users.length > 0) {",
            "@else {",
            "@for (user of users; track user; let i = $index) {",
            "<div>@switch (mode) {",
            "@case ('admin') {",
            "@default {",
        ):
            assert fragment in text
        assert "*ngIf" not in text
        assert "*ngFor" not in text
        assert "ngSwitch" not in text
        assert _balanced(text)


class TestTemplatePipeline:
    def test_single_record(self, make_file, sample_template):
        file = make_file("src/app/user.component.html", sample_template)
        (record,) = transform(file)
        assert record.description == "Migrated 5 structural directive(s) to block control flow"
        assert transform(file.with_transformations([record])) == []

    def test_nothing_to_do(self, make_file):
        assert transform(make_file("src/a.html", "<p>@if (a) { b }</p>")) == []
