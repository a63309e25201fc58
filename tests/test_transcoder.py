import pytest
import yaml

from devblog.services.transcoder import (
    DockerTranscoder,
    TranscodeError,
    dump_manifest,
    load_manifest,
)


def to_service_map(text: str) -> dict:
    return yaml.safe_load(text)["services"]


def test_simple_manifest_to_command():
    tc = DockerTranscoder()
    manifest = 'services:\n  web:\n    image: nginx:alpine\n    ports:\n      - "8080:80"\n'
    assert tc.to_commands(manifest) == ["docker run -d --name web -p 8080:80 nginx:alpine"]


def test_complex_service_flags_are_translated_and_quoted():
    manifest = """
services:
  db:
    image: postgres:15
    container_name: primary-db
    restart: unless-stopped
    environment:
      - POSTGRES_USER=app
      - EMPTY
    volumes:
      - type: volume
        source: pgdata
        target: /var/lib/postgresql/data
        read_only: true
    ports:
      - target: 5432
        published: 15432
        protocol: udp
    healthcheck:
      test: ["CMD-SHELL", "pg_isready -U app"]
      interval: 10s
      retries: 5
    command: ["postgres", "-c", "log_statement=all"]
"""
    (cmd,) = DockerTranscoder().to_commands(manifest)
    assert cmd.startswith("docker run -d --name primary-db --restart unless-stopped ")
    assert "-p 15432:5432/udp" in cmd
    assert "-e POSTGRES_USER=app -e EMPTY" in cmd
    assert "-v pgdata:/var/lib/postgresql/data:ro" in cmd
    assert "--health-cmd 'pg_isready -U app' --health-interval 10s --health-retries 5" in cmd
    assert cmd.endswith(" postgres:15 postgres -c log_statement=all")


def test_build_only_service_runs_image_named_after_service():
    manifest = "services:\n  api:\n    build: ./api\n    depends_on: [db]\n"
    assert DockerTranscoder().to_commands(manifest) == ["docker run -d --name api api"]


def test_network_and_boolean_options():
    manifest = """
services:
  shell:
    image: alpine
    networks: [backend]
    stdin_open: true
    tty: true
    working_dir: /work
    entrypoint: ["sh", "-c"]
    command: echo hi
"""
    (cmd,) = DockerTranscoder().to_commands(manifest)
    assert "--network backend" in cmd
    assert " -w /work " in cmd
    assert " -i -t " in cmd
    assert cmd.endswith("--entrypoint sh alpine -c echo hi")


@pytest.mark.parametrize(
    "manifest, message",
    [
        ("services: [unclosed", "Invalid YAML"),
        ("- just\n- a list\n", "mapping"),
        ("version: '3'\n", "does not define any services"),
        ("services:\n  web:\n    ports: ['80:80']\n", "has no image"),
        ("services:\n  web: nginx\n", "must be a mapping"),
    ],
)
def test_bad_manifests_raise(manifest, message):
    with pytest.raises(TranscodeError, match=message):
        DockerTranscoder().to_commands(manifest)


def test_run_command_options_to_service():
    text = (
        "docker run -dit --rm -p8080:80 --env=FOO=bar -e EMPTY "
        "--restart unless-stopped -l tier=web --privileged nginx:1.25"
    )
    services = to_service_map(DockerTranscoder().to_manifest(text))
    assert services == {
        "nginx": {
            "image": "nginx:1.25",
            "restart": "unless-stopped",
            "ports": ["8080:80"],
            "environment": {"FOO": "bar", "EMPTY": None},
            "labels": ["tier=web"],
            "stdin_open": True,
            "tty": True,
            "privileged": True,
        }
    }


def test_bundled_short_flags_may_end_with_a_value_option():
    tc = DockerTranscoder()
    services = to_service_map(tc.to_manifest("docker run -dp 80:80 nginx\ndocker run -itv a:/a alpine"))
    assert services["nginx"] == {"image": "nginx", "ports": ["80:80"]}
    assert services["alpine"] == {
        "image": "alpine",
        "volumes": ["a:/a"],
        "stdin_open": True,
        "tty": True,
    }


def test_run_command_extended_options_to_service():
    text = (
        "docker run -P --mount type=volume,src=d,dst=/d,readonly "
        "--mount type=bind,source=./conf,target=/etc/app "
        "--link db:db --log-driver json-file --log-opt max-size=10m "
        "--ulimit nofile=1024:2048 --ulimit nproc=512 "
        "--security-opt no-new-privileges --sysctl net.core.somaxconn=1024 "
        "--ipc host --pid host --pull always --volumes-from data "
        "--network backend --network-alias api registry.local/api:1"
    )
    document = yaml.safe_load(DockerTranscoder().to_manifest(text))
    service = document["services"]["api"]
    assert service["publish_all"] is True
    assert service["volumes"] == [
        {"type": "volume", "source": "d", "target": "/d", "read_only": True},
        {"type": "bind", "source": "./conf", "target": "/etc/app"},
    ]
    assert service["links"] == ["db:db"]
    assert service["logging"] == {"driver": "json-file", "options": {"max-size": "10m"}}
    assert service["ulimits"] == {"nofile": {"soft": 1024, "hard": 2048}, "nproc": 512}
    assert service["security_opt"] == ["no-new-privileges"]
    assert service["sysctls"] == {"net.core.somaxconn": "1024"}
    assert service["ipc"] == "host"
    assert service["pid"] == "host"
    assert service["pull_policy"] == "always"
    assert service["volumes_from"] == ["data"]
    assert service["networks"] == {"backend": {"aliases": ["api"]}}
    assert document["volumes"] == {"d": {"external": True, "name": "d"}}
    assert document["networks"] == {"backend": {"external": True}}


def test_extended_service_keys_to_command():
    manifest = """
services:
  api:
    image: api
    networks:
      backend:
        aliases: [api]
    links: ["db:db"]
    ipc: host
    pull_policy: always
    sysctls:
      net.core.somaxconn: 1024
    ulimits:
      nofile: {soft: 1024, hard: 2048}
    logging:
      driver: json-file
      options:
        max-size: 10m
    publish_all: true
"""
    (cmd,) = DockerTranscoder().to_commands(manifest)
    assert "--network backend --network-alias api" in cmd
    assert "--ipc host" in cmd
    assert "--pull always" in cmd
    assert "--link db:db" in cmd
    assert "--sysctl net.core.somaxconn=1024" in cmd
    assert "--ulimit nofile=1024:2048" in cmd
    assert "--log-driver json-file --log-opt max-size=10m" in cmd
    assert " -P " in cmd


def test_network_alias_on_default_network():
    services = to_service_map(DockerTranscoder().to_manifest("docker run --network-alias web nginx"))
    assert services["nginx"]["networks"] == {"default": {"aliases": ["web"]}}
    (cmd,) = DockerTranscoder().to_commands(
        "services:\n  nginx:\n    image: nginx\n    networks:\n      default:\n        aliases: [web]\n"
    )
    assert cmd == "docker run -d --name nginx --network-alias web nginx"


def test_compose_scalars_keep_their_string_form():
    manifest = """
services:
  git:
    image: gitea/gitea
    ports:
      - 2222:22
      - 3000:3000
    environment:
      DEBUG: on
      TIME: 12:30
      ENABLED: yes
      BUILT: 2024-01-05
      STRICT: true
      RETRIES: 3
"""
    (cmd,) = DockerTranscoder().to_commands(manifest)
    assert "-p 2222:22 -p 3000:3000" in cmd
    assert (
        "-e DEBUG=on -e TIME=12:30 -e ENABLED=yes -e BUILT=2024-01-05 "
        "-e STRICT=true -e RETRIES=3"
    ) in cmd


def test_manifest_loader_uses_core_schema():
    document = load_manifest("a: 0x1F\nb: 1.5\nc: .inf\nd: ~\ne: 010\nf: off\ng: -7\nh: 1e3\n")
    assert document["a"] == 31
    assert document["b"] == 1.5
    assert document["c"] == float("inf")
    assert document["d"] is None
    assert document["e"] == "010"
    assert document["f"] == "off"
    assert document["g"] == -7
    assert document["h"] == 1000.0


def test_service_names_derive_from_image_and_are_unique():
    text = (
        "docker run nginx\n"
        "docker container run ghcr.io/acme/web-app:2.0\n"
        "docker run nginx:alpine\n"
    )
    assert list(to_service_map(DockerTranscoder().to_manifest(text))) == [
        "nginx",
        "web-app",
        "nginx-2",
    ]


def test_line_continuations_and_trailing_command():
    text = "docker run -d \\\n  --name hello \\\n  alpine echo 'hello world'\n# comment\n"
    services = to_service_map(DockerTranscoder().to_manifest(text))
    assert services == {"hello": {"image": "alpine", "command": "echo 'hello world'"}}


def test_healthcheck_and_networks():
    text = (
        "docker run --network mynet --health-cmd 'curl -f localhost' "
        "--health-retries 3 --health-interval 5s web\n"
        "docker run --network host cache"
    )
    document = yaml.safe_load(DockerTranscoder().to_manifest(text))
    assert document["services"]["web"]["networks"] == ["mynet"]
    assert document["services"]["web"]["healthcheck"] == {
        "test": ["CMD-SHELL", "curl -f localhost"],
        "interval": "5s",
        "retries": 3,
    }
    assert document["services"]["cache"]["network_mode"] == "host"
    assert document["networks"] == {"mynet": {"external": True}}


def test_named_volumes_are_annotated_and_created_ones_commented():
    text = "docker run -v data:/data -v ./src:/src -v /anon alpine"
    manifest = DockerTranscoder().to_manifest(text, volumes=["data", "extra"])
    document = yaml.safe_load(manifest)
    assert document["volumes"] == {
        "data": {"external": True, "name": "data"},
        "extra": {"external": True, "name": "extra"},
    }
    assert "  # Created with: docker volume create data\n  data:\n" in manifest
    assert "  # Created with: docker volume create extra\n  extra:\n" in manifest
    assert document["services"]["alpine"]["volumes"] == ["data:/data", "./src:/src", "/anon"]


def test_volume_create_lines_are_recognized_inline():
    manifest = DockerTranscoder().to_manifest("docker volume create cache\n")
    assert yaml.safe_load(manifest) == {"volumes": {"cache": {"external": True, "name": "cache"}}}


@pytest.mark.parametrize(
    "text, message",
    [
        ("ls -la", "Not a docker run command"),
        ("docker run -d", "Missing image"),
        ("docker run --bogus nginx", "Unsupported option: --bogus"),
        ("docker run -xyz nginx", "Unsupported option: -xyz"),
        ("docker run nginx -p", None),
        ("docker run -p", "requires a value"),
        ("docker run 'unterminated", "Cannot parse command"),
        ("docker run --health-retries many nginx", "expects an integer"),
        ("", "No docker run commands"),
    ],
)
def test_bad_commands_raise(text, message):
    tc = DockerTranscoder()
    if message is None:
        # Options after the image belong to the container command
        services = to_service_map(tc.to_manifest(text))
        assert services["nginx"]["command"] == "-p"
        return
    with pytest.raises(TranscodeError, match=message):
        tc.to_manifest(text)


def test_dump_manifest_layout():
    text = dump_manifest({"services": {"a": {"ports": ["80:80"]}}, "volumes": {"v": None}})
    assert text == "services:\n  a:\n    ports:\n      - 80:80\nvolumes:\n  v:\n"
