# dcv

`dcv` is a Python library for looking into a Docker host. It lists
containers, Compose projects, images, networks and volumes. It looks inside
Docker-in-Docker hosts and streams container logs. It also holds the state
used by a keyboard-driven viewer: key events, key maps, named commands, and
the search and filter input lines.

It drives the `docker` command line, so `docker` (with the `compose` plugin)
must be on your `PATH`.

## Listing things

```python
from dcv.client import Client

client = Client()

for container in client.list_containers(show_all=True):
    print(container.id, container.names, container.status, container.is_dind())

for project in client.list_compose_projects():
    print(project.name, project.status, project.config_files)

compose = client.compose("myproject")
for service in compose.list_containers(show_all=False):
    print(service.service, service.status(), service.ports_string())

for image in client.list_images(show_all=False):
    print(image.repo_tag(), image.size)

for network in client.list_networks():
    print(network.name, network.driver, network.internal)

for volume in client.list_volumes():
    print(volume.name, volume.driver, volume.get_label("com.docker.compose.project"))

for stats in client.get_stats(show_all=False):
    print(stats.name, stats.cpu_perc, stats.mem_usage)

for entry in client.list_container_files("web", "/etc"):
    print(entry.permissions, entry.display_name())
```

`client.dind(host_container_id).list_containers()` lists the containers
that run inside a Docker-in-Docker host. `compose.top(service_name)` returns
the `docker compose top` output as text. `client.execute_interactive(container_id,
["/bin/sh"])` runs `docker exec -it` attached to the current terminal.

`ComposeClient.list_containers` returns an empty list when `docker compose ps`
fails. The other listing calls raise `dcv.executor.DockerCommandError` when
`docker` cannot be started or exits with a non-zero status. The error carries
`exit_code` and the captured `output`.

`Client` takes an optional `runner`, a callable that receives the docker
arguments and returns the combined output as bytes. This makes it easy to
feed in canned output:

```python
from dcv.client import Client

client = Client(runner=lambda *args: b'{"Name":"vol","Driver":"local"}\n')
assert client.list_volumes()[0].is_local()
```

## Acting on a container

`dcv.container.HostContainer` and `dcv.container.DindContainer` describe a
container that operations act on. Their `operation_args(op)` returns the
docker arguments for `stop`, `start`, `pause` and so on. `inspect()` and
`top()` run the matching docker command through the client you pass in.
`title()` returns a caption for display.

## Parsing captured output

The parsers in `dcv.parser` accept bytes or text. You can feed them output
that you captured yourself:

```python
from dcv.parser import parse_ps_json, parse_volume_size

containers = parse_ps_json(b'{"ID":"abc123","Names":"web","Image":"nginx:latest"}\n')
assert containers[0].names == "web"

assert parse_volume_size("2KB") == 2048
```

Most parsers skip lines that are not valid JSON records. `parse_stats_json`
raises `dcv.parser.ParseError` on any invalid line. `parse_compose_ps_json`
raises it when an invalid line comes before the first valid one.
`parse_compose_projects_json` accepts both a JSON array and one object per
line.

## Configuration

`dcv.config.load()` reads `dcv/config.toml` from `$XDG_CONFIG_HOME`. If that
variable is not set, it reads from the platform's user configuration
directory (`dcv.config.config_path()` tells you where). When no file exists,
the defaults are used:

```toml
[general]
initial_view = "docker"   # or "compose", "projects"
```

A file that cannot be read or parsed raises `dcv.config.ConfigError`.

## Logs

`dcv.log_reader.LogReaderManager` starts a log command and collects its
stdout and stderr lines in the background. Stderr lines are prefixed with
`[STDERR] `. You then poll the manager:

```python
import time

from dcv.log_reader import LogLines, LogReaderManager, PollContinue

manager = LogReaderManager()
manager.stream(["docker", "logs", "--tail", "100", "web"])
while (message := manager.poll()) is not None:
    if isinstance(message, LogLines):
        print("\n".join(message.lines))
    elif isinstance(message, PollContinue):
        time.sleep(0.05)
manager.stop()
```

`stream` returns `CommandExecuted` on success and `StreamError` when the
command cannot be started.

## Keys and commands

`dcv.keys` defines `KeyType`, `KeyEvent`, `KeyConfig` and `build_keymap`.
`dcv.commands.command_name` turns a handler's function name into a command
name. It drops a `cmd_` or `Cmd` prefix and uses kebab case, so a handler
`cmd_go_to_end` becomes `go-to-end`. `to_kebab_case("ShowComposeLog")` gives
`"show-compose-log"`. `CommandRegistry` keeps the commands of each view and
answers `lookup(view, name)` and `is_known(name)`.

`dcv.search.SearchState` and `dcv.filter.FilterState` hold the text, the
cursor and the options of the search and filter lines. They also render
those lines with a highlighted cursor.

## What it does not do

`dcv` has no terminal screens and installs no command to run. It provides the
docker access, the parsing and the input state. Drawing views and running an
event loop are left to the program that uses it.