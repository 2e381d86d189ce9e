from dataclasses import dataclass, field

from rich.pretty import pprint

from dataflags import *


@dataclass
class ZipFolder:
    folder_name: str = option("", alias="folder", usage="specify folder name")


@dataclass
class ZipFile:
    file_name: str = option("defaultzip.file", alias="f", usage="specify file name")


@dataclass
class DryRun:
    pass


@dataclass
class Compress:
    profile: str = ""
    skip: bool = option(False, alias="s")
    no_flag: str = option("", skip=True)
    dry_run: DryRun = action(DryRun, usage="dry run, doesn't actually create any file")
    zip_folder: ZipFolder = action(ZipFolder, usage="zip a folder")
    zip_file: ZipFile = action(ZipFile, usage="zip a file")


@dataclass
class Extract:
    input_file: str = option("", usage="input zip file")


@dataclass
class Help:
    pass


@dataclass
class ZipCLI:
    config_file: str = option("default.conf", usage="working profile")
    compress: Compress = action(Compress, usage="to compress things")
    extract: Extract = action(Extract, usage="to unzip things")
    help: Help = field(default_factory=Help, metadata={"dataflags": {"action": True, "usage": "help"}})


if __name__ == '__main__':
    zipcli = ZipCLI()
    filler = Filler("zipcli", "a zip command")
    filler.fill(zipcli)
    actions = filler.parse()
    if actions == ["help"]:
        filler.usage()
    pprint(actions)
    pprint(zipcli)
