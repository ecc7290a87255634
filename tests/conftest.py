# tests/conftest.py
import os
import sys

import pytest

# 프로젝트 루트 경로를 계산해서 sys.path 맨 앞에 넣어준다.
# 이러면 어디서 pytest를 실행해도 'build_notify' 패키지를 안정적으로 import 할 수 있다.
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from build_notify.domain.build import Author, Build, NotificationConfig, Plugin, Repo  # noqa: E402

MESSAGE_TEMPLATE = """Message Template:
{{build.message}}
{{build.message.title}}
{{build.message.body}}"""

FALLBACK_TEMPLATE = """Message Template Fallback:
{{build.message.title}}
{{build.branch}}
{{build.status}}"""

FIELDS_TEMPLATE = '[{"title": "{{build.status}}", "short": true, "value": "{{build.branch}}"}]'


# --- 픽스처 ----------------------------------------------------------------

@pytest.fixture
def repo() -> Repo:
    return Repo(owner="octocat", name="hello-world")


@pytest.fixture
def build() -> Build:
    return Build(
        tag="1.0.0",
        event="push",
        number=1,
        commit="7fd1a60b01f91b314f59955a4e4d4e80d8edf11d",
        ref="",
        branch="master",
        author=Author(
            username="octocat",
            name="The Octocat",
            email="octocat@github.com",
            avatar="https://avatars0.githubusercontent.com/u/583231?s=460&v=4",
        ),
        pull="",
        message="Initial commit\n\nMessage body",
        deploy_to="",
        status="success",
        link="http://github.com/octocat/hello-world",
        started=1546340400,  # 2019-01-01 11:00:00 UTC
        created=1546340400,
    )


@pytest.fixture
def template_config() -> NotificationConfig:
    return NotificationConfig(
        webhook="https://hooks.slack.com/services/T000/B000/XXXX",
        template=MESSAGE_TEMPLATE,
        fallback=FALLBACK_TEMPLATE,
        fields_template=FIELDS_TEMPLATE,
    )


@pytest.fixture
def plugin(repo, build) -> Plugin:
    """템플릿 없이 기본 포맷을 쓰는 plugin"""
    return Plugin(
        repo=repo,
        build=build,
        config=NotificationConfig(webhook="https://hooks.slack.com/services/T000/B000/XXXX"),
    )


@pytest.fixture
def template_plugin(repo, build, template_config) -> Plugin:
    """message / fallback / fields 템플릿이 모두 설정된 plugin"""
    return Plugin(repo=repo, build=build, config=template_config)
