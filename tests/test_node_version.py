"""Tests for Node version pins and version managers"""
import pytest

from fracture.models.project import NodeVersionPin
from fracture.services.node_version import (
    detect_node_version,
    find_nvm_script,
    wrap_with_version_manager,
)

NPM_INSTALL = ["npm", "install"]


def which_only(*available):
    """Fake shutil.which that finds only the named tools."""
    return lambda name: f"/usr/local/bin/{name}" if name in available else None


class TestDetectNodeVersion:
    """Test pin file detection."""

    def test_no_pin(self, temp_dir):
        assert detect_node_version(temp_dir) is None

    def test_nvmrc(self, temp_dir):
        (temp_dir / ".nvmrc").write_text("v18.19.0\n")
        assert detect_node_version(temp_dir) == NodeVersionPin("v18.19.0", ".nvmrc")

    def test_node_version_file(self, temp_dir):
        (temp_dir / ".node-version").write_text("20.11.1")
        assert detect_node_version(temp_dir) == NodeVersionPin("20.11.1", ".node-version")

    def test_tool_versions(self, temp_dir):
        (temp_dir / ".tool-versions").write_text("python 3.12.1\nnodejs 21.6.0\nruby 3.3.0\n")
        assert detect_node_version(temp_dir) == NodeVersionPin("21.6.0", ".tool-versions")

    def test_tool_versions_without_node(self, temp_dir):
        (temp_dir / ".tool-versions").write_text("python 3.12.1\n")
        assert detect_node_version(temp_dir) is None

    def test_priority_order(self, temp_dir):
        (temp_dir / ".tool-versions").write_text("nodejs 16.0.0\n")
        (temp_dir / ".node-version").write_text("18.0.0\n")
        assert detect_node_version(temp_dir).version == "18.0.0"

        (temp_dir / ".nvmrc").write_text("20\n")
        assert detect_node_version(temp_dir).version == "20"

    def test_comments_and_blank_lines(self, temp_dir):
        (temp_dir / ".nvmrc").write_text("# pinned for CI\n\nlts/iron\n")
        assert detect_node_version(temp_dir).version == "lts/iron"

    def test_empty_nvmrc_falls_through(self, temp_dir):
        (temp_dir / ".nvmrc").write_text("\n")
        (temp_dir / ".node-version").write_text("18\n")
        assert detect_node_version(temp_dir) == NodeVersionPin("18", ".node-version")


class TestFindNvmScript:
    """Test nvm.sh lookup."""

    def test_nvm_dir_env(self, temp_dir):
        (temp_dir / "nvm.sh").write_text("")
        assert find_nvm_script({"NVM_DIR": str(temp_dir)}) == temp_dir / "nvm.sh"

    def test_home_default(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        (temp_dir / ".nvm").mkdir()
        (temp_dir / ".nvm" / "nvm.sh").write_text("")
        assert find_nvm_script({}) == temp_dir / ".nvm" / "nvm.sh"

    def test_missing(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert find_nvm_script({}) is None


class TestWrapWithVersionManager:
    """Test install command wrapping."""

    PIN = NodeVersionPin("20", ".nvmrc")

    def test_no_pin_is_unchanged(self):
        assert wrap_with_version_manager(NPM_INSTALL, None, which=which_only("fnm")) == NPM_INSTALL

    def test_fnm(self):
        wrapped = wrap_with_version_manager(NPM_INSTALL, self.PIN, which=which_only("fnm", "n"))
        assert wrapped == ["/usr/local/bin/fnm", "exec", "--using", "20", "--", "npm", "install"]

    def test_nvm(self, temp_dir):
        (temp_dir / "nvm.sh").write_text("")
        wrapped = wrap_with_version_manager(
            NPM_INSTALL, self.PIN, which=which_only("bash", "n"), env={"NVM_DIR": str(temp_dir)}
        )
        assert wrapped[:2] == ["/usr/local/bin/bash", "-c"]
        assert f". {temp_dir / 'nvm.sh'}" in wrapped[2]
        assert wrapped[2].endswith("nvm exec 20 npm install")

    def test_n(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        wrapped = wrap_with_version_manager(NPM_INSTALL, self.PIN, which=which_only("n"), env={})
        assert wrapped == ["/usr/local/bin/n", "exec", "20", "npm", "install"]

    def test_no_manager(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert wrap_with_version_manager(NPM_INSTALL, self.PIN, which=which_only(), env={}) == NPM_INSTALL

    @pytest.mark.parametrize("version", ["lts/iron", "v18.19.0"])
    def test_version_is_passed_verbatim(self, version):
        pin = NodeVersionPin(version, ".nvmrc")
        wrapped = wrap_with_version_manager(NPM_INSTALL, pin, which=which_only("fnm"))
        assert wrapped[3] == version
