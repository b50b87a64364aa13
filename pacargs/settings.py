"""
pacargs settings: the front end's own configuration surface.

What this module provides
- TargetMode / SortMode: small enumerations used by the configuration.
- Runtime: per-invocation state that is never persisted (target mode, --save).
- Configuration: persisted preferences plus Runtime, constructed once at startup
  and threaded explicitly to whoever needs it (there is no module-level instance).
- Configuration.extract(arguments): the second parsing pass that moves extension
  options out of an Arguments value into typed fields, so they are never
  forwarded to the wrapped tool.
- Configuration.load(path) / Configuration.save(path): the JSON settings file.

Extraction rules
- The option's first recorded value is used.
- Paired switches ("devel" / "nodevel") set a boolean either way.
- Integer options are converted strictly; an unparsable value, or a non-positive
  one where a positive value is required, is ignored and the previous value
  stays (logged at debug level only). The option is still consumed.
- Every consumed name is deleted from both maps of the Arguments value.
- Afterwards the AUR base URL loses its trailing "/" and the RPC endpoint used by
  the network client is derived from it.
"""
import json
import logging
import os
from enum import IntEnum
from pathlib import Path

from .faults import *
from .utils import Unset, coalesce, integer

logger = logging.getLogger(__name__)


class TargetMode(IntEnum):
    ANY = 0
    AUR = 1
    REPO = 2


class SortMode(IntEnum):
    BOTTOM_UP = 0
    TOP_DOWN = 1


def _cache_home():
    return Path(os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache")


def default_config_path():
    """
    Return the settings file location: $PACARGS_CONFIG, else
    $XDG_CONFIG_HOME/yay/config.json, else ~/.config/yay/config.json.
    """
    if override := os.environ.get("PACARGS_CONFIG"):
        return Path(override)
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "yay" / "config.json"


class Runtime:
    """
    invocation-scoped state; never written to the settings file.

    source is the input source that served "-" (see pacargs.sources); after
    parsing, source.prompt is where later interactive prompts read from.
    """

    def __init__(self, mode=TargetMode.ANY, save_config=False, config_path=None, source=Unset):
        self.mode = mode
        self.save_config = save_config
        self.config_path = config_path
        self.source = source

    def __repr__(self):
        return "Runtime(mode=%s, save_config=%r, config_path=%r)" % (self.mode.name, self.save_config, self.config_path)

    def __rich_repr__(self):
        yield "mode", self.mode.name
        yield "save_config", self.save_config
        yield "config_path", self.config_path


# field -> key in the persisted JSON file (the front end's historical spelling)
_PERSISTED = {
    "aur_url": "aururl",
    "build_dir": "buildDir",
    "abs_dir": "absdir",
    "editor": "editor",
    "editor_flags": "editorflags",
    "makepkg_bin": "makepkgbin",
    "makepkg_conf": "makepkgconf",
    "pacman_bin": "pacmanbin",
    "pacman_conf": "pacmanconf",
    "git_bin": "gitbin",
    "gpg_bin": "gpgbin",
    "sudo_bin": "sudobin",
    "git_flags": "gitflags",
    "gpg_flags": "gpgflags",
    "mflags": "mflags",
    "sudo_flags": "sudoflags",
    "sort_by": "sortby",
    "search_by": "searchby",
    "sort_mode": "sortmode",
    "completion_interval": "completionrefreshtime",
    "request_split_n": "requestsplitn",
    "redownload": "redownload",
    "rebuild": "rebuild",
    "remove_make": "removemake",
    "answer_clean": "answerclean",
    "answer_diff": "answerdiff",
    "answer_edit": "answeredit",
    "answer_upgrade": "answerupgrade",
    "clean_after": "cleanAfter",
    "devel": "devel",
    "time_update": "timeupdate",
    "sudo_loop": "sudoloop",
    "batch_install": "batchinstall",
    "provides": "provides",
    "pgp_fetch": "pgpfetch",
    "upgrade_menu": "upgrademenu",
    "clean_menu": "cleanmenu",
    "diff_menu": "diffmenu",
    "edit_menu": "editmenu",
    "use_ask": "useask",
    "combined_upgrade": "combinedupgrade",
}


def _defaults():
    build_dir = str(_cache_home() / "yay")
    return {
        "aur_url": "https://aur.archlinux.org",
        "build_dir": build_dir,
        "abs_dir": os.path.join(build_dir, "abs"),
        "editor": "",
        "editor_flags": "",
        "makepkg_bin": "makepkg",
        "makepkg_conf": "",
        "pacman_bin": "pacman",
        "pacman_conf": "/etc/pacman.conf",
        "git_bin": "git",
        "gpg_bin": "gpg",
        "sudo_bin": "sudo",
        "git_flags": "",
        "gpg_flags": "",
        "mflags": "",
        "sudo_flags": "",
        "sort_by": "votes",
        "search_by": "name-desc",
        "sort_mode": SortMode.BOTTOM_UP,
        "completion_interval": 7,
        "request_split_n": 150,
        "redownload": "no",
        "rebuild": "no",
        "remove_make": "ask",
        "answer_clean": "",
        "answer_diff": "",
        "answer_edit": "",
        "answer_upgrade": "",
        "clean_after": False,
        "devel": False,
        "time_update": False,
        "sudo_loop": False,
        "batch_install": False,
        "provides": True,
        "pgp_fetch": True,
        "upgrade_menu": True,
        "clean_menu": True,
        "diff_menu": True,
        "edit_menu": False,
        "use_ask": False,
        "combined_upgrade": False,
        "no_confirm": False,
    }


# --- extension option handlers -------------------------------------------------
# each handler receives (config, value) and returns True once the option is consumed,
# including integer options whose value was ignored

def _assign(field):
    def handler(config, value):
        setattr(config, field, value)
        return True
    return handler


def _constant(field, constant):
    def handler(config, value):
        setattr(config, field, constant)
        return True
    return handler


def _runtime(field, constant):
    def handler(config, value):
        setattr(config.runtime, field, constant)
        return True
    return handler


def _integer(field, *, positive=False):
    def handler(config, value):
        number = integer(value)
        if number is None or (positive and number <= 0):
            logger.debug("ignoring %s=%r, keeping %r", field, value, getattr(config, field))
        else:
            setattr(config, field, number)
        return True
    return handler


def _switches(field, enabled, disabled):
    return {
        **dict.fromkeys(enabled, _constant(field, True)),
        **dict.fromkeys(disabled, _constant(field, False)),
    }


HANDLERS = {
    "aururl": _assign("aur_url"),
    "save": _runtime("save_config", True),
    **_switches("clean_after", ("afterclean", "cleanafter"), ("noafterclean", "nocleanafter")),
    **_switches("devel", ("devel",), ("nodevel",)),
    **_switches("time_update", ("timeupdate",), ("notimeupdate",)),
    "topdown": _constant("sort_mode", SortMode.TOP_DOWN),
    "bottomup": _constant("sort_mode", SortMode.BOTTOM_UP),
    "completioninterval": _integer("completion_interval"),
    "sortby": _assign("sort_by"),
    "searchby": _assign("search_by"),
    "noconfirm": _constant("no_confirm", True),
    "config": _assign("pacman_conf"),
    "redownload": _constant("redownload", "yes"),
    "redownloadall": _constant("redownload", "all"),
    "noredownload": _constant("redownload", "no"),
    "rebuild": _constant("rebuild", "yes"),
    "rebuildall": _constant("rebuild", "all"),
    "rebuildtree": _constant("rebuild", "tree"),
    "norebuild": _constant("rebuild", "no"),
    **_switches("batch_install", ("batchinstall",), ("nobatchinstall",)),
    "answerclean": _assign("answer_clean"),
    "noanswerclean": _constant("answer_clean", ""),
    "answerdiff": _assign("answer_diff"),
    "noanswerdiff": _constant("answer_diff", ""),
    "answeredit": _assign("answer_edit"),
    "noansweredit": _constant("answer_edit", ""),
    "answerupgrade": _assign("answer_upgrade"),
    "noanswerupgrade": _constant("answer_upgrade", ""),
    "gpgflags": _assign("gpg_flags"),
    "mflags": _assign("mflags"),
    "gitflags": _assign("git_flags"),
    "builddir": _assign("build_dir"),
    "absdir": _assign("abs_dir"),
    "editor": _assign("editor"),
    "editorflags": _assign("editor_flags"),
    "makepkg": _assign("makepkg_bin"),
    "makepkgconf": _assign("makepkg_conf"),
    "nomakepkgconf": _constant("makepkg_conf", ""),
    "pacman": _assign("pacman_bin"),
    "git": _assign("git_bin"),
    "gpg": _assign("gpg_bin"),
    "sudo": _assign("sudo_bin"),
    "sudoflags": _assign("sudo_flags"),
    "requestsplitn": _integer("request_split_n", positive=True),
    **_switches("sudo_loop", ("sudoloop",), ("nosudoloop",)),
    **_switches("provides", ("provides",), ("noprovides",)),
    **_switches("pgp_fetch", ("pgpfetch",), ("nopgpfetch",)),
    **_switches("upgrade_menu", ("upgrademenu",), ("noupgrademenu",)),
    **_switches("clean_menu", ("cleanmenu",), ("nocleanmenu",)),
    **_switches("diff_menu", ("diffmenu",), ("nodiffmenu",)),
    **_switches("edit_menu", ("editmenu",), ("noeditmenu",)),
    **_switches("use_ask", ("useask",), ("nouseask",)),
    **_switches("combined_upgrade", ("combinedupgrade",), ("nocombinedupgrade",)),
    "a": _runtime("mode", TargetMode.AUR),
    "aur": _runtime("mode", TargetMode.AUR),
    "repo": _runtime("mode", TargetMode.REPO),
    "removemake": _constant("remove_make", "yes"),
    "noremovemake": _constant("remove_make", "no"),
    "askremovemake": _constant("remove_make", "ask"),
}
"""
extension option name -> handler(config, value) -> bool.
"""


class Configuration:
    """
    The front end's settings.

    Construction starts from built-in defaults, optionally overridden by keyword
    (Configuration(devel=True)). load() layers the JSON settings file on top and
    extract() layers the command line on top of that. rpc_url is derived from
    aur_url and is refreshed by extract().
    """

    def __init__(self, runtime=Unset, **overrides):
        values = _defaults()
        if unknown := overrides.keys() - values.keys():
            raise TypeError("Configuration() got unexpected fields: %s" % ", ".join(sorted(unknown)))
        values.update(overrides)
        self.__dict__.update(values)
        self.runtime = coalesce(runtime, Runtime())
        self.rpc_url = self.aur_url.rstrip("/") + "/rpc.php?"

    def __repr__(self):
        return "Configuration(%s)" % ", ".join("%s=%r" % item for item in self.__dict__.items())

    def __rich_repr__(self):
        yield from self.__dict__.items()

    def handle(self, option, value, /):
        """
        apply one extension option; return True when it was consumed.
        """
        try:
            handler = HANDLERS[option]
        except KeyError:
            return False
        return handler(self, value)

    def extract(self, arguments, /):
        """
        move extension options out of arguments into this configuration.

        local options are scanned before globals; a consumed name is deleted from
        both maps. returns the consumed names in the order they were applied.
        """
        consumed = []
        for options in (arguments.options, arguments.globals):
            for option, value in list(options.items()):
                if self.handle(option, value.first()):
                    arguments.del_arg(option)
                    consumed.append(option)

        self.aur_url = self.aur_url.rstrip("/")
        self.rpc_url = self.aur_url + "/rpc.php?"

        if consumed:
            logger.debug("consumed extension options: %s", ", ".join(consumed))
        return consumed

    @classmethod
    def load(cls, path=Unset, /, *, runtime=Unset):
        """
        build a configuration from defaults and the JSON settings file at path.

        a missing file yields the defaults; unknown keys are ignored; a value of
        the wrong JSON type for a known key is ignored as well. unreadable or
        malformed files raise InvalidConfigError.
        """
        path = Path(coalesce(path, default_config_path()))
        config = cls(runtime=runtime)
        config.runtime.config_path = path

        try:
            with open(path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except FileNotFoundError:
            logger.debug("no settings file at %s, using defaults", path)
            return config
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            trigger(InvalidConfigError(
                "cannot read settings file %r: %s" % (str(path), error),
                title="invalid settings file",
                code=FaultCode.INVALID_CONFIG,
                token=str(path),
                hint="fix or remove the file; defaults are used when it is missing",
                docs=getdoc(FaultCode.INVALID_CONFIG),
            ))

        if not isinstance(data, dict):
            trigger(InvalidConfigError(
                "settings file %r must contain a JSON object" % str(path),
                title="invalid settings file",
                code=FaultCode.INVALID_CONFIG,
                token=str(path),
                hint="the file must look like {\"sortby\": \"votes\", ...}",
                docs=getdoc(FaultCode.INVALID_CONFIG),
            ))

        for field, key in _PERSISTED.items():
            if key not in data:
                continue
            value = data[key]
            current = getattr(config, field)
            if isinstance(current, IntEnum):
                try:
                    value = type(current)(value)
                except ValueError:
                    logger.debug("ignoring %s=%r in %s", key, value, path)
                    continue
            elif type(value) is not type(current):
                logger.debug("ignoring %s=%r in %s", key, value, path)
                continue
            setattr(config, field, value)

        config.rpc_url = config.aur_url.rstrip("/") + "/rpc.php?"
        return config

    def save(self, path=Unset, /):
        """
        write the persisted fields as indented JSON, creating parent directories.
        """
        path = Path(coalesce(path, self.runtime.config_path or default_config_path()))
        data = {key: int(value) if isinstance(value := getattr(self, field), IntEnum) else value
                for field, key in _PERSISTED.items()}
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as file:
                json.dump(data, file, indent="\t")
                file.write("\n")
        except OSError as error:
            trigger(InvalidConfigError(
                "cannot write settings file %r: %s" % (str(path), error),
                title="unwritable settings file",
                code=FaultCode.INVALID_CONFIG,
                token=str(path),
                hint="check the permissions of the settings directory",
                docs=getdoc(FaultCode.INVALID_CONFIG),
            ))
        logger.debug("saved settings to %s", path)
        return path


__all__ = (
    "TargetMode",
    "SortMode",
    "Runtime",
    "Configuration",
    "HANDLERS",
    "default_config_path",
)
