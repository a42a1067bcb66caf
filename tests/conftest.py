"""Shared test fixtures: sample Angular sources and a temp project tree."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from ngmodernize.files.classifier import classify
from ngmodernize.files.models import AnalyzedFile


@pytest.fixture
def sample_component() -> str:
    """An Angular 5 style component with every component-level idiom."""
    return textwrap.dedent("""\
        import { Component, OnInit } from '@angular/core';
        import { FormGroup, FormControl } from '@angular/forms';
        import { Http } from '@angular/http';
        import { map } from 'rxjs/operators';
        import { UserService } from './user.service';

        @Component({
          selector: 'app-user',
          templateUrl: './user.component.html'
        })
        export class UserComponent implements OnInit {
          form = new FormGroup();
          name = new FormControl();

          constructor(private userService: UserService, private http: Http) {}

          ngOnInit() {
            this.userService.load();
          }
        }
    """)


@pytest.fixture
def sample_service() -> str:
    return textwrap.dedent("""\
        import { Injectable } from '@angular/core';
        import { HttpClient } from '@angular/common/http';
        import { Observable } from 'rxjs/Observable';

        @Injectable()
        export class UserService {
          private baseUrl = 'http://localhost:8080/api';

          constructor(private http: HttpClient) {}

          load(): Observable<any> {
            return this.http.get(this.baseUrl + '/users');
          }
        }
    """)


@pytest.fixture
def sample_template() -> str:
    return textwrap.dedent("""\
        <div class="users">
          <h1>{{ title }}</h1>
          <ul *ngIf="users.length > 0; else empty">
            <li *ngFor="let user of users; let i = index">{{ i }}: {{ user.name | json }}</li>
          </ul>
          <ng-template #empty><p>No users</p></ng-template>
          <div [ngSwitch]="mode">
            <span *ngSwitchCase="'admin'">Admin</span>
            <span *ngSwitchDefault>User</span>
          </div>
        </div>
    """)


@pytest.fixture
def sample_module() -> str:
    return textwrap.dedent("""\
        import { NgModule } from '@angular/core';
        import { BrowserModule } from '@angular/platform-browser';
        import { HttpClientModule } from '@angular/common/http';
        import { AppComponent } from './app.component';

        @NgModule({
          declarations: [AppComponent],
          imports: [BrowserModule, HttpClientModule],
          bootstrap: [AppComponent]
        })
        export class AppModule {}
    """)


@pytest.fixture
def sample_routing() -> str:
    return textwrap.dedent("""\
        import { NgModule } from '@angular/core';
        import { RouterModule, Routes } from '@angular/router';

        const routes: Routes = [];

        @NgModule({
          imports: [RouterModule.forRoot(routes)],
          exports: [RouterModule]
        })
        export class AppRoutingModule {}
    """)


@pytest.fixture
def sample_manifest() -> str:
    return textwrap.dedent("""\
        {
          "name": "legacy-app",
          "version": "1.0.0",
          "dependencies": {
            "@angular/core": "^5.2.0",
            "@angular/common": "^5.2.0",
            "@angular/http": "^5.2.0",
            "rxjs": "^5.5.6"
          },
          "devDependencies": {
            "typescript": "~2.5.3"
          }
        }
    """)


@pytest.fixture
def make_file():
    """Build a classified AnalyzedFile from a path and its content."""

    def _make(path: str, content: str) -> AnalyzedFile:
        return AnalyzedFile(path=path, content=content).with_type(classify(path, content))

    return _make


@pytest.fixture
def angular_project(
    tmp_path: Path,
    sample_component: str,
    sample_service: str,
    sample_template: str,
    sample_module: str,
    sample_routing: str,
    sample_manifest: str,
) -> Path:
    """A small legacy Angular workspace on disk."""
    root = tmp_path / "legacy-app"
    app = root / "src" / "app"
    app.mkdir(parents=True)
    (root / "package.json").write_text(sample_manifest, encoding="utf-8")
    (root / "angular.json").write_text(json.dumps({"version": 1, "projects": {}}), encoding="utf-8")
    (root / "tsconfig.json").write_text('{"compilerOptions": {}}\n', encoding="utf-8")
    (app / "user.component.ts").write_text(sample_component, encoding="utf-8")
    (app / "user.component.html").write_text(sample_template, encoding="utf-8")
    (app / "user.service.ts").write_text(sample_service, encoding="utf-8")
    (app / "app.module.ts").write_text(sample_module, encoding="utf-8")
    (app / "app-routing.module.ts").write_text(sample_routing, encoding="utf-8")
    (root / "src" / "styles.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    return root
