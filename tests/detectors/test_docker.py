"""Tests for the container configuration auditor."""

from clawscan import scan
from clawscan.core.findings import Severity
from clawscan.detectors.docker import (
    COMPOSE_CHECKS,
    DOCKERFILE_CHECKS,
    DockerDetector,
    checks_for,
)
from clawscan.scanner.context import ScanContext
from clawscan.scanner.discovery import discover_files

HARDENED_SERVICE = """services:
  web:
    image: nginx:1.25
    read_only: true
    security_opt:
      - no-new-privileges:true
"""


def run_detector(root):
    return DockerDetector().scan(ScanContext(root, discover_files(root)))


def titles(findings):
    return [f.title for f in findings]


def test_dispatch_by_file_name():
    assert checks_for("Dockerfile") is DOCKERFILE_CHECKS
    assert checks_for("dockerfile") is DOCKERFILE_CHECKS
    assert checks_for("docker-compose.yml") is COMPOSE_CHECKS
    assert checks_for("compose.yaml") is COMPOSE_CHECKS
    assert checks_for("Dockerfile.dev") == ()
    assert checks_for("compose.json") == ()


class TestDockerfile:
    def test_root_latest_and_curl_bash(self):
        content = "FROM node:latest\nRUN curl -fsSL https://get.tool.sh | bash\nCMD [\"node\"]\n"

        findings = DockerDetector().scan_with_checks("Dockerfile", content, DOCKERFILE_CHECKS)
        found = {f.title: f for f in findings}

        assert set(found) == {
            "Dockerfile Runs as Root",
            "Using :latest Tag",
            "Curl-Bash Installation Pattern",
        }
        assert found["Dockerfile Runs as Root"].line == 1
        assert found["Curl-Bash Installation Pattern"].line == 2
        assert found["Curl-Bash Installation Pattern"].severity is Severity.HIGH

    def test_non_root_user_mitigates(self):
        content = "FROM python:3.12-slim\nUSER app\n"
        findings = DockerDetector().scan_with_checks("Dockerfile", content, DOCKERFILE_CHECKS)
        assert findings == []

    def test_user_root_does_not_mitigate(self):
        for user in ("root", "0"):
            content = f"FROM python:3.12-slim\nUSER {user}\n"
            findings = DockerDetector().scan_with_checks("Dockerfile", content, DOCKERFILE_CHECKS)
            assert titles(findings) == ["Dockerfile Runs as Root"]

    def test_hardcoded_secret_in_env(self):
        content = "FROM alpine:3.20\nUSER 1000\nENV API_TOKEN=Zq8Lm3Np7Rt2Vw6Yb1Cd5Fh9\n"
        findings = DockerDetector().scan_with_checks("Dockerfile", content, DOCKERFILE_CHECKS)

        assert titles(findings) == ["Hardcoded Secret in ENV"]
        assert findings[0].severity is Severity.CRITICAL
        assert findings[0].line == 3

    def test_add_and_sensitive_copy(self):
        content = (
            "FROM alpine:3.20\nUSER 1000\n"
            "ADD https://example.org/tool.tgz /opt/\n"
            "ADD app.tar.gz /srv/\n"
            "COPY certs/server.pem /etc/ssl/\n"
        )
        findings = DockerDetector().scan_with_checks("Dockerfile", content, DOCKERFILE_CHECKS)
        found = {f.title: f for f in findings}

        assert set(found) == {"Using ADD Instead of COPY", "Copying Sensitive Files"}
        assert found["Using ADD Instead of COPY"].line == 4


class TestCompose:
    def test_privileged_not_suppressed_by_read_only(self):
        content = HARDENED_SERVICE + "    privileged: true\n"

        findings = DockerDetector().scan_with_checks("docker-compose.yml", content, COMPOSE_CHECKS)

        assert titles(findings) == ["Privileged Container Mode"]
        assert findings[0].severity is Severity.CRITICAL
        assert findings[0].line == 7

    def test_missing_hardening_reported(self):
        content = "services:\n  web:\n    image: nginx:1.25\n"
        findings = DockerDetector().scan_with_checks("compose.yml", content, COMPOSE_CHECKS)

        assert titles(findings) == ["Missing Read-Only Filesystem", "Missing No-New-Privileges"]
        assert all(f.line == 3 for f in findings)

    def test_socket_mount_and_sensitive_volume(self):
        content = HARDENED_SERVICE + (
            "    volumes:\n"
            "      - /var/run/docker.sock:/var/run/docker.sock\n"
            "      - ~/.ssh:/home/app/.ssh:ro\n"
        )
        findings = DockerDetector().scan_with_checks("compose.yaml", content, COMPOSE_CHECKS)
        found = {f.title: f for f in findings}

        assert set(found) == {"Docker Socket Mount", "Sensitive Directory Mounted"}
        assert found["Docker Socket Mount"].line == 8
        assert found["Sensitive Directory Mounted"].line == 9

    def test_port_binding_falls_back_to_line_one(self):
        content = HARDENED_SERVICE + '    ports:\n      - "8080:80"\n'
        findings = DockerDetector().scan_with_checks("compose.yaml", content, COMPOSE_CHECKS)

        assert titles(findings) == ["Externally Exposed Port"]
        # multi-line signature, no single line matches
        assert findings[0].line == 1

    def test_localhost_port_binding_not_reported(self):
        content = HARDENED_SERVICE + '    ports:\n      - "127.0.0.1:8080:80"\n'
        findings = DockerDetector().scan_with_checks("compose.yaml", content, COMPOSE_CHECKS)
        assert findings == []

    def test_one_finding_per_check(self):
        content = (
            "services:\n"
            "  a:\n    image: redis:latest\n    read_only: true\n"
            "    security_opt: [no-new-privileges:true]\n"
            "  b:\n    image: postgres:latest\n"
        )
        findings = DockerDetector().scan_with_checks("compose.yml", content, COMPOSE_CHECKS)

        assert titles(findings) == ["Using :latest Tag"]
        assert findings[0].line == 3


def test_scan_walks_nested_files(make_tree):
    root = make_tree(
        {
            "services/api/Dockerfile": "FROM node:20\n",
            "deploy/docker-compose.yaml": HARDENED_SERVICE,
            "docs/Dockerfile.md": "FROM node:latest\n",
        }
    )

    findings = run_detector(root)

    assert [(f.file, f.title) for f in findings] == [
        ("services/api/Dockerfile", "Dockerfile Runs as Root"),
    ]


def test_binary_dockerfile_skipped(make_tree):
    root = make_tree({"Dockerfile": b"FROM node:latest\x00\nRUN curl x | bash\n"})

    assert run_detector(root) == []
    assert scan(root).findings == []
