from __future__ import annotations
import logging
import re
import shlex
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml

logger = logging.getLogger(__name__)


class TranscodeError(ValueError):
    """Raised when a manifest or a command cannot be translated."""


class ManifestDumper(yaml.SafeDumper):
    """Compose-style YAML: indented block sequences and bare null values."""

    def increase_indent(self, flow: bool = False, indentless: bool = False):  # noqa: ARG002
        return super().increase_indent(flow, False)


def _represent_none(dumper: yaml.SafeDumper, _data: None) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")


ManifestDumper.add_representer(type(None), _represent_none)


_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class ManifestLoader(yaml.SafeLoader):
    """Resolves plain scalars the way compose does (YAML 1.2 core schema).

    ``2222:22`` and ``12:30`` stay strings instead of base-60 numbers,
    ``on``/``yes``/``off``/``no`` stay strings, and dates are not converted.
    """


ManifestLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in (_BOOL_TAG, _INT_TAG, _FLOAT_TAG, _TIMESTAMP_TAG)
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ManifestLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)
ManifestLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*)|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
ManifestLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+\.[0-9]*|[0-9]+(?:\.[0-9]*)?[eE][-+]?[0-9]+)"
        r"|[-+]?\.(?:inf|Inf|INF)|\.(?:nan|NaN|NAN))$"
    ),
    list("-+.0123456789"),
)


def load_manifest(text: str) -> Any:
    return yaml.load(text, Loader=ManifestLoader)


def dump_manifest(document: Dict[str, Any]) -> str:
    return yaml.dump(
        document,
        Dumper=ManifestDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )


VOLUME_CREATE_RE = re.compile(
    r"^docker\s+volume\s+create\s+(?P<name>[A-Za-z0-9][A-Za-z0-9_.-]*)\s*$"
)

_RUN_PREFIXES: Tuple[Tuple[str, ...], ...] = (
    ("docker", "container", "run"),
    ("docker", "run"),
)

_NETWORK_MODES = {"host", "bridge", "none", "default"}

# Options that take a value, mapped to the parsed-option key
_VALUE_OPTIONS: Dict[str, str] = {
    "-p": "ports",
    "--publish": "ports",
    "-e": "environment",
    "--env": "environment",
    "-v": "volumes",
    "--volume": "volumes",
    "--name": "name",
    "--restart": "restart",
    "--network": "network",
    "--net": "network",
    "-w": "working_dir",
    "--workdir": "working_dir",
    "-u": "user",
    "--user": "user",
    "-h": "hostname",
    "--hostname": "hostname",
    "--entrypoint": "entrypoint",
    "--env-file": "env_file",
    "-l": "labels",
    "--label": "labels",
    "--add-host": "extra_hosts",
    "--expose": "expose",
    "--dns": "dns",
    "--cap-add": "cap_add",
    "--cap-drop": "cap_drop",
    "--device": "devices",
    "--tmpfs": "tmpfs",
    "-m": "mem_limit",
    "--memory": "mem_limit",
    "--cpus": "cpus",
    "--platform": "platform",
    "--shm-size": "shm_size",
    "--stop-signal": "stop_signal",
    "--health-cmd": "health_cmd",
    "--health-interval": "health_interval",
    "--health-timeout": "health_timeout",
    "--health-start-period": "health_start_period",
    "--health-retries": "health_retries",
    "--mount": "mounts",
    "--link": "links",
    "--log-driver": "log_driver",
    "--log-opt": "log_opts",
    "--ulimit": "ulimits",
    "--security-opt": "security_opt",
    "--sysctl": "sysctls",
    "--ipc": "ipc",
    "--pid": "pid",
    "--pull": "pull_policy",
    "--network-alias": "network_aliases",
    "--volumes-from": "volumes_from",
}

_REPEATABLE = {
    "ports",
    "environment",
    "volumes",
    "env_file",
    "labels",
    "extra_hosts",
    "expose",
    "dns",
    "cap_add",
    "cap_drop",
    "devices",
    "tmpfs",
    "mounts",
    "links",
    "log_opts",
    "ulimits",
    "security_opt",
    "sysctls",
    "network_aliases",
    "volumes_from",
}

# Boolean flags; None means "accepted but has no manifest equivalent"
_FLAG_OPTIONS: Dict[str, Optional[str]] = {
    "-d": None,
    "--detach": None,
    "--rm": None,
    "-i": "stdin_open",
    "--interactive": "stdin_open",
    "-t": "tty",
    "--tty": "tty",
    "--privileged": "privileged",
    "--init": "init",
    "--read-only": "read_only",
    "--no-healthcheck": "no_healthcheck",
    "-P": "publish_all",
    "--publish-all": "publish_all",
}

# Manifest keys copied verbatim from a parsed option of the same name
_SCALAR_KEYS = (
    "restart",
    "hostname",
    "working_dir",
    "user",
    "entrypoint",
    "platform",
    "mem_limit",
    "cpus",
    "shm_size",
    "stop_signal",
    "ipc",
    "pid",
    "pull_policy",
)
_LIST_KEYS = (
    "env_file",
    "labels",
    "extra_hosts",
    "expose",
    "dns",
    "cap_add",
    "cap_drop",
    "devices",
    "tmpfs",
    "links",
    "security_opt",
    "volumes_from",
)
_BOOL_KEYS = ("stdin_open", "tty", "privileged", "init", "read_only", "publish_all")


@dataclass
class _RunCommand:
    image: str
    options: Dict[str, Any]
    command: List[str]


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _key_values(entries: Iterable[str]) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for entry in entries:
        key, _, value = entry.partition("=")
        pairs[key] = value
    return pairs


def _is_named_volume(source: str) -> bool:
    return bool(source) and source[0] not in "/.~$" and "/" not in source


def _service_name_from_image(image: str) -> str:
    ref = image.split("@", 1)[0]
    base = ref.rsplit("/", 1)[-1]
    base = base.split(":", 1)[0]
    name = re.sub(r"[^A-Za-z0-9_.-]", "-", base).strip("-.")
    return name or "service"


class DockerTranscoder:
    """Translates between compose manifests and ``docker run`` commands.

    ``to_commands`` maps every service of a manifest to one self-contained
    ``docker run`` invocation. ``to_manifest`` does the reverse and, like the
    usual web converters, annotates every named volume as ``external`` with
    an explicit ``name``. Volumes passed through ``volumes`` (created with
    ``docker volume create``) additionally get a generated comment.
    """

    supports_volume_commands = True

    # ---------- Manifest -> commands ----------
    def to_commands(self, manifest_text: str) -> List[str]:
        try:
            document = load_manifest(manifest_text)
        except yaml.YAMLError as exc:
            raise TranscodeError(self._yaml_message(exc)) from exc
        if not isinstance(document, dict):
            raise TranscodeError("Manifest must be a mapping with a 'services' section")
        services = document.get("services")
        if not isinstance(services, dict) or not services:
            raise TranscodeError("Manifest does not define any services")
        return [
            self._service_to_command(str(name), service)
            for name, service in services.items()
        ]

    @staticmethod
    def _yaml_message(exc: yaml.YAMLError) -> str:
        problem = getattr(exc, "problem", None)
        mark = getattr(exc, "problem_mark", None)
        if problem and mark is not None:
            return f"Invalid YAML: {problem} (line {mark.line + 1}, column {mark.column + 1})"
        return f"Invalid YAML: {exc}"

    def _service_to_command(self, name: str, service: Any) -> str:
        if service is None:
            service = {}
        if not isinstance(service, dict):
            raise TranscodeError(f"Service '{name}' must be a mapping")
        image = service.get("image") or (name if "build" in service else None)
        if not image:
            raise TranscodeError(f"Service '{name}' has no image")

        args: List[str] = ["docker", "run", "-d", "--name"]
        args.append(_scalar(service.get("container_name") or name))
        if service.get("restart"):
            args += ["--restart", _scalar(service["restart"])]
        for port in _as_list(service.get("ports")):
            args += ["-p", self._port_arg(name, port)]
        for env in self._environment_args(service.get("environment")):
            args += ["-e", env]
        for env_file in _as_list(service.get("env_file")):
            path = env_file.get("path") if isinstance(env_file, dict) else env_file
            args += ["--env-file", _scalar(path)]
        for volume in _as_list(service.get("volumes")):
            args += ["-v", self._volume_arg(name, volume)]

        network = service.get("network_mode")
        aliases: List[Any] = []
        networks = service.get("networks")
        if not network and networks:
            if isinstance(networks, dict):
                network = next(iter(networks))
                entry = networks[network]
                if isinstance(entry, dict):
                    aliases = _as_list(entry.get("aliases"))
            else:
                network = _as_list(networks)[0]
        if network and network != "default":
            args += ["--network", _scalar(network)]
        for alias in aliases:
            args += ["--network-alias", _scalar(alias)]

        simple_options = (
            ("hostname", "--hostname"),
            ("working_dir", "-w"),
            ("user", "-u"),
            ("platform", "--platform"),
            ("mem_limit", "--memory"),
            ("cpus", "--cpus"),
            ("shm_size", "--shm-size"),
            ("stop_signal", "--stop-signal"),
            ("ipc", "--ipc"),
            ("pid", "--pid"),
            ("pull_policy", "--pull"),
        )
        for key, flag in simple_options:
            if service.get(key) is not None:
                args += [flag, _scalar(service[key])]

        labels = service.get("labels")
        if isinstance(labels, dict):
            labels = [f"{k}={_scalar(v)}" for k, v in labels.items()]
        for label in _as_list(labels):
            args += ["-l", _scalar(label)]
        extra_hosts = service.get("extra_hosts")
        if isinstance(extra_hosts, dict):
            extra_hosts = [f"{k}:{_scalar(v)}" for k, v in extra_hosts.items()]
        for host in _as_list(extra_hosts):
            args += ["--add-host", _scalar(host)]
        for key, flag in (
            ("expose", "--expose"),
            ("dns", "--dns"),
            ("cap_add", "--cap-add"),
            ("cap_drop", "--cap-drop"),
            ("devices", "--device"),
            ("tmpfs", "--tmpfs"),
            ("links", "--link"),
            ("security_opt", "--security-opt"),
            ("volumes_from", "--volumes-from"),
        ):
            for value in _as_list(service.get(key)):
                args += [flag, _scalar(value)]
        sysctls = service.get("sysctls")
        if isinstance(sysctls, dict):
            sysctls = [f"{k}={_scalar(v)}" for k, v in sysctls.items()]
        for sysctl in _as_list(sysctls):
            args += ["--sysctl", _scalar(sysctl)]
        args += self._ulimit_args(name, service.get("ulimits"))
        args += self._logging_args(service.get("logging"))
        for key, flag in (
            ("stdin_open", "-i"),
            ("tty", "-t"),
            ("privileged", "--privileged"),
            ("init", "--init"),
            ("read_only", "--read-only"),
            ("publish_all", "-P"),
        ):
            if service.get(key) is True:
                args.append(flag)

        args += self._healthcheck_args(name, service.get("healthcheck"))

        command = self._split_command(service.get("command"))
        entrypoint = self._split_command(service.get("entrypoint"))
        if entrypoint:
            args += ["--entrypoint", entrypoint[0]]
            command = entrypoint[1:] + command

        ignored = sorted(
            key for key in service if key in ("build", "depends_on", "deploy", "profiles")
        )
        if ignored:
            logger.debug("Service %s: no docker run equivalent for %s", name, ignored)

        args.append(_scalar(image))
        args += command
        return shlex.join(args)

    @staticmethod
    def _split_command(value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            try:
                return shlex.split(value)
            except ValueError as exc:
                raise TranscodeError(f"Cannot parse command '{value}': {exc}") from exc
        return [_scalar(v) for v in _as_list(value)]

    @staticmethod
    def _port_arg(service: str, port: Any) -> str:
        if isinstance(port, dict):
            target = port.get("target")
            if target is None:
                raise TranscodeError(f"Service '{service}': port mapping without target")
            value = str(target)
            if port.get("published") is not None:
                value = f"{port['published']}:{value}"
                if port.get("host_ip"):
                    value = f"{port['host_ip']}:{value}"
            if port.get("protocol") and port["protocol"] != "tcp":
                value = f"{value}/{port['protocol']}"
            return value
        return _scalar(port)

    @staticmethod
    def _environment_args(environment: Any) -> List[str]:
        if isinstance(environment, dict):
            return [
                key if value is None else f"{key}={_scalar(value)}"
                for key, value in environment.items()
            ]
        return [_scalar(item) for item in _as_list(environment)]

    @staticmethod
    def _volume_arg(service: str, volume: Any) -> str:
        if isinstance(volume, dict):
            target = volume.get("target")
            if not target:
                raise TranscodeError(f"Service '{service}': volume without target")
            value = f"{volume['source']}:{target}" if volume.get("source") else str(target)
            if volume.get("read_only"):
                value += ":ro"
            return value
        return _scalar(volume)

    @staticmethod
    def _healthcheck_args(service: str, healthcheck: Any) -> List[str]:
        if not healthcheck:
            return []
        if not isinstance(healthcheck, dict):
            raise TranscodeError(f"Service '{service}': healthcheck must be a mapping")
        if healthcheck.get("disable"):
            return ["--no-healthcheck"]
        args: List[str] = []
        test = healthcheck.get("test")
        if isinstance(test, (list, tuple)) and test:
            kind, rest = str(test[0]), [_scalar(t) for t in test[1:]]
            if kind == "NONE":
                return ["--no-healthcheck"]
            if kind == "CMD-SHELL":
                args += ["--health-cmd", " ".join(rest)]
            elif kind == "CMD":
                args += ["--health-cmd", shlex.join(rest)]
            else:
                args += ["--health-cmd", shlex.join([kind] + rest)]
        elif isinstance(test, str) and test:
            args += ["--health-cmd", test]
        for key, flag in (
            ("interval", "--health-interval"),
            ("timeout", "--health-timeout"),
            ("start_period", "--health-start-period"),
            ("retries", "--health-retries"),
        ):
            if healthcheck.get(key) is not None:
                args += [flag, _scalar(healthcheck[key])]
        return args

    @staticmethod
    def _ulimit_args(service: str, ulimits: Any) -> List[str]:
        if not ulimits:
            return []
        if not isinstance(ulimits, dict):
            raise TranscodeError(f"Service '{service}': ulimits must be a mapping")
        args: List[str] = []
        for limit, value in ulimits.items():
            if isinstance(value, dict):
                value = f"{value.get('soft')}:{value.get('hard')}"
            args += ["--ulimit", f"{limit}={_scalar(value)}"]
        return args

    @staticmethod
    def _logging_args(log_config: Any) -> List[str]:
        if not isinstance(log_config, dict):
            return []
        args: List[str] = []
        if log_config.get("driver"):
            args += ["--log-driver", _scalar(log_config["driver"])]
        for key, value in (log_config.get("options") or {}).items():
            args += ["--log-opt", f"{key}={_scalar(value)}"]
        return args

    # ---------- Commands -> manifest ----------
    def to_manifest(self, command_text: str, volumes: Iterable[str] = ()) -> str:
        created: List[str] = list(dict.fromkeys(volumes))
        runs: List[_RunCommand] = []
        for line in self._logical_lines(command_text):
            match = VOLUME_CREATE_RE.match(line)
            if match:
                if match["name"] not in created:
                    created.append(match["name"])
                continue
            runs.append(self._parse_run(line))
        if not runs and not created:
            raise TranscodeError("No docker run commands found")

        services: Dict[str, Any] = {}
        named_volumes: List[str] = []
        networks: List[str] = []
        for run in runs:
            name = self._unique_name(
                run.options.get("name") or _service_name_from_image(run.image), services
            )
            services[name] = self._run_to_service(run, named_volumes, networks)

        parts: List[str] = []
        if services:
            parts.append(dump_manifest({"services": services}))
        volume_names = list(dict.fromkeys(named_volumes + created))
        if volume_names:
            parts.append(self._dump_volumes(volume_names, created))
        if networks:
            parts.append(
                dump_manifest(
                    {"networks": {net: {"external": True} for net in dict.fromkeys(networks)}}
                )
            )
        return "".join(parts)

    @staticmethod
    def _logical_lines(text: str) -> List[str]:
        joined = re.sub(r"\\[ \t]*\r?\n", " ", text)
        lines = []
        for raw in joined.splitlines():
            line = raw.strip()
            if line and not line.startswith("#"):
                lines.append(line)
        return lines

    @staticmethod
    def _unique_name(base: str, taken: Dict[str, Any]) -> str:
        if base not in taken:
            return base
        n = 2
        while f"{base}-{n}" in taken:
            n += 1
        return f"{base}-{n}"

    def _parse_run(self, line: str) -> _RunCommand:
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            raise TranscodeError(f"Cannot parse command: {exc}") from exc
        start = 0
        for prefix in _RUN_PREFIXES:
            if tuple(tokens[: len(prefix)]) == prefix:
                start = len(prefix)
                break
        if not start:
            preview = line if len(line) <= 40 else line[:37] + "..."
            raise TranscodeError(f"Not a docker run command: {preview}")

        options: Dict[str, Any] = {}
        i = start
        while i < len(tokens):
            token = tokens[i]
            if token == "--":
                i += 1
                break
            if not token.startswith("-") or token == "-":
                break
            name, inline = token, None
            if token.startswith("--"):
                if "=" in token:
                    name, inline = token.split("=", 1)
            elif len(token) > 2:
                name, inline = self._expand_short_bundle(token, options)
                if name is None:
                    i += 1
                    continue
            if name in _FLAG_OPTIONS:
                if inline is None or inline.lower() not in ("false", "0"):
                    self._set_flag(options, name)
                i += 1
                continue
            if name not in _VALUE_OPTIONS:
                raise TranscodeError(f"Unsupported option: {name}")
            if inline is None:
                i += 1
                if i >= len(tokens):
                    raise TranscodeError(f"Option {name} requires a value")
                inline = tokens[i]
            key = _VALUE_OPTIONS[name]
            if key in _REPEATABLE:
                options.setdefault(key, []).append(inline)
            else:
                options[key] = inline
            i += 1

        if i >= len(tokens):
            raise TranscodeError("Missing image name in docker run command")
        return _RunCommand(image=tokens[i], options=options, command=tokens[i + 1 :])

    def _expand_short_bundle(
        self, token: str, options: Dict[str, Any]
    ) -> Tuple[Optional[str], Optional[str]]:
        """Apply the boolean flags of a bundle such as ``-dit`` or ``-dp``.

        Returns the trailing value option with its attached value (``-p8080:80``
        gives ``("-p", "8080:80")``), or ``(None, None)`` when every letter is
        a flag.
        """
        for pos, ch in enumerate(token[1:], start=2):
            flag = f"-{ch}"
            if flag in _FLAG_OPTIONS:
                self._set_flag(options, flag)
            elif flag in _VALUE_OPTIONS:
                return flag, token[pos:] or None
            else:
                raise TranscodeError(f"Unsupported option: {token}")
        return None, None

    @staticmethod
    def _set_flag(options: Dict[str, Any], flag: str) -> None:
        key = _FLAG_OPTIONS[flag]
        if key:
            options[key] = True

    def _run_to_service(
        self, run: _RunCommand, named_volumes: List[str], networks: List[str]
    ) -> Dict[str, Any]:
        opts = run.options
        service: Dict[str, Any] = {"image": run.image}
        if "restart" in opts:
            service["restart"] = opts["restart"]
        if opts.get("ports"):
            service["ports"] = list(opts["ports"])
        if opts.get("environment"):
            service["environment"] = self._environment_mapping(opts["environment"])
        volumes: List[Any] = []
        for mount in opts.get("volumes", []):
            source = mount.split(":", 1)[0] if ":" in mount else ""
            if _is_named_volume(source):
                named_volumes.append(source)
            volumes.append(mount)
        for mount in opts.get("mounts", []):
            volume = self._mount_to_volume(mount)
            if volume["type"] == "volume" and _is_named_volume(volume.get("source", "")):
                named_volumes.append(volume["source"])
            volumes.append(volume)
        if volumes:
            service["volumes"] = volumes

        network = opts.get("network")
        aliases = opts.get("network_aliases")
        if aliases and network in (None, "default"):
            service["networks"] = {"default": {"aliases": list(aliases)}}
        elif network in _NETWORK_MODES or (network or "").startswith(("container:", "service:")):
            if aliases:
                raise TranscodeError("--network-alias needs a user-defined network")
            service["network_mode"] = network
        elif network:
            service["networks"] = {network: {"aliases": list(aliases)}} if aliases else [network]
            networks.append(network)
        for key in _SCALAR_KEYS:
            if key in opts and key not in service:
                service[key] = opts[key]
        for key in _LIST_KEYS:
            if opts.get(key):
                service[key] = list(opts[key])
        for key in _BOOL_KEYS:
            if opts.get(key):
                service[key] = True
        if opts.get("sysctls"):
            service["sysctls"] = _key_values(opts["sysctls"])
        if opts.get("ulimits"):
            service["ulimits"] = self._ulimits(opts["ulimits"])
        if "log_driver" in opts or opts.get("log_opts"):
            log_config: Dict[str, Any] = {}
            if "log_driver" in opts:
                log_config["driver"] = opts["log_driver"]
            if opts.get("log_opts"):
                log_config["options"] = _key_values(opts["log_opts"])
            service["logging"] = log_config

        healthcheck = self._healthcheck(opts)
        if healthcheck:
            service["healthcheck"] = healthcheck
        if run.command:
            service["command"] = shlex.join(run.command)
        return service

    @staticmethod
    def _mount_to_volume(mount: str) -> Dict[str, Any]:
        """``type=volume,src=data,dst=/data,readonly`` as a long-syntax volume."""
        volume: Dict[str, Any] = {"type": "volume"}
        for field in mount.split(","):
            key, sep, value = field.partition("=")
            key = key.strip().lower()
            enabled = not sep or value.lower() in ("true", "1")
            if key == "type":
                volume["type"] = value
            elif key in ("source", "src"):
                volume["source"] = value
            elif key in ("target", "destination", "dst"):
                volume["target"] = value
            elif key in ("readonly", "ro"):
                if enabled:
                    volume["read_only"] = True
            elif key == "bind-propagation":
                volume["bind"] = {"propagation": value}
            elif key == "volume-nocopy":
                volume["volume"] = {"nocopy": enabled}
            elif key == "tmpfs-size":
                volume["tmpfs"] = {"size": value}
            else:
                raise TranscodeError(f"Unsupported --mount field: {key}")
        if "target" not in volume:
            raise TranscodeError(f"--mount needs a target: {mount}")
        return volume

    @staticmethod
    def _ulimits(entries: Sequence[str]) -> Dict[str, Any]:
        limits: Dict[str, Any] = {}
        for entry in entries:
            limit, _, value = entry.partition("=")
            try:
                if ":" in value:
                    soft, hard = value.split(":", 1)
                    limits[limit] = {"soft": int(soft), "hard": int(hard)}
                else:
                    limits[limit] = int(value)
            except ValueError as exc:
                raise TranscodeError(f"Invalid --ulimit value: {entry}") from exc
        return limits

    @staticmethod
    def _environment_mapping(entries: Sequence[str]) -> Dict[str, Optional[str]]:
        env: Dict[str, Optional[str]] = {}
        for entry in entries:
            key, sep, value = entry.partition("=")
            env[key] = value if sep else None
        return env

    @staticmethod
    def _healthcheck(opts: Dict[str, Any]) -> Dict[str, Any]:
        if opts.get("no_healthcheck"):
            return {"disable": True}
        healthcheck: Dict[str, Any] = {}
        if "health_cmd" in opts:
            healthcheck["test"] = ["CMD-SHELL", opts["health_cmd"]]
        for key in ("interval", "timeout", "start_period"):
            if f"health_{key}" in opts:
                healthcheck[key] = opts[f"health_{key}"]
        if "health_retries" in opts:
            try:
                healthcheck["retries"] = int(opts["health_retries"])
            except ValueError as exc:
                raise TranscodeError(
                    f"--health-retries expects an integer, got '{opts['health_retries']}'"
                ) from exc
        return healthcheck

    @staticmethod
    def _dump_volumes(names: List[str], created: List[str]) -> str:
        text = dump_manifest(
            {"volumes": {name: {"external": True, "name": name} for name in names}}
        )
        out: List[str] = []
        for line in text.splitlines():
            if line.startswith("  ") and not line.startswith("   "):
                key = line.strip().rstrip(":").strip("'\"")
                if key in created:
                    out.append(f"  # Created with: docker volume create {key}")
            out.append(line)
        return "\n".join(out) + "\n"
