from subprocess import DEVNULL, check_output

from setuptools import find_packages, setup


def get_git_version():
    command = "git describe --tags --long --dirty"
    fmt = "{tag}+{commitcount}.{gitsha}"

    try:
        git_version = check_output(command.split(), stderr=DEVNULL).decode("utf-8").strip()
    except Exception:
        return None

    if git_version.startswith("v"):
        git_version = git_version[1:]

    parts = git_version.split("-")
    assert len(parts) in (3, 4)
    dirty = len(parts) == 4
    tag, count, sha = parts[:3]
    if count == "0" and not dirty:
        version = tag
    else:
        version = fmt.format(tag=tag, commitcount=count, gitsha=sha)
        if dirty:
            version = version + ".dirty"

    return version


def get_version():
    # Try to read existing release version file.
    try:
        with open("RELEASE-VERSION", "r") as f:
            fs_version = f.readlines()[0].strip()
    except Exception:
        fs_version = None

    # Get the version as described by git, if present.
    version = get_git_version()
    if version is None:
        version = fs_version

    if version is None:
        raise ValueError("Cannot find the version number!")

    if version != fs_version:
        with open("RELEASE-VERSION", "w") as f:
            f.write("{}\n".format(version))

    return version


setup(
    name="builderize",
    version=get_version(),
    description="Generate code that rebuilds a Python syntax tree from node builders",
    packages=find_packages(include=["builderize", "builderize.*"]),
    python_requires=">=3.9",
    entry_points={"console_scripts": ["builderize = builderize.driver:main"]},
    extras_require={"test": ["pytest"]},
)
