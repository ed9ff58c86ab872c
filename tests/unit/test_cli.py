"""
CLI Tests
Tests for merkle_cli/main.py and merkle_cli/commands/*

Commands run in-process through main(argv); output is captured with capsys.
Client commands talk to an in-process app through a TestClient-backed
stand-in for HttpClient.
"""
import json

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.store import FileStore
from core.crypto.hashing import from_le_bytes, hash_word, to_hex
from core.http.client import HttpResponse
from core.merkle.merkle_tree import root_of
from merkle_cli.commands import client as client_cmd
from merkle_cli.commands.common import parse_indices
from merkle_cli.main import main

from fixtures.common import (
    EIGHT_WORD_HASHES,
    EIGHT_WORD_ROOT,
    EIGHT_WORD_SENTENCE,
    TRUST_ROOT,
    TRUST_SENTENCE,
)


@pytest.fixture(autouse=True)
def isolated_cwd(clean_env, tmp_path):
    """Run every command in an empty directory with no config files."""
    clean_env.chdir(tmp_path)
    clean_env.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


def run_json(capsys, argv):
    code = main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestRootCommand:
    """merkle root"""

    def test_root_json(self, capsys):
        code, data = run_json(capsys, ["root", TRUST_SENTENCE, "--json"])

        assert code == 0
        assert data["root"] == TRUST_ROOT
        assert data["root_hex"] == to_hex(TRUST_ROOT)
        assert data["num_leaves"] == 4
        assert data["depth"] == 3
        assert data["hasher"] == "siphash13"

    def test_root_from_file(self, capsys, isolated_cwd):
        path = isolated_cwd / "words.txt"
        path.write_text(TRUST_SENTENCE + "\n")

        code, data = run_json(capsys, ["root", "--file", str(path), "--json"])

        assert code == 0
        assert data["root"] == TRUST_ROOT

    def test_root_human(self, capsys):
        assert main(["root", TRUST_SENTENCE]) == 0
        assert f"root: {TRUST_ROOT}" in capsys.readouterr().out

    def test_root_needs_input(self, capsys):
        assert main(["root"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_hasher_option(self, capsys):
        code, data = run_json(capsys, ["--hasher", "sha256", "root", TRUST_SENTENCE, "--json"])

        assert code == 0
        assert data["hasher"] == "sha256"
        assert data["root"] != TRUST_ROOT

    def test_hasher_from_env(self, capsys, clean_env):
        clean_env.setenv("MERKLE_HASH_ALGORITHM", "sha256")
        _, data = run_json(capsys, ["root", TRUST_SENTENCE, "--json"])
        assert data["hasher"] == "sha256"


class TestProveAndVerify:
    """merkle prove / merkle verify"""

    def test_prove_json(self, capsys):
        code, data = run_json(capsys, ["prove", TRUST_SENTENCE, "--index", "1", "--json"])

        assert code == 0
        assert data == {
            "root": TRUST_ROOT,
            "proof": [{"Left": 4099928055547683737}, {"Right": 2769272874327709143}],
            "index": 1,
            "leaf": "trust",
        }

    def test_prove_then_verify(self, capsys, isolated_cwd):
        out = isolated_cwd / "proof.json"
        assert main(["prove", TRUST_SENTENCE, "--index", "2", "--out", str(out)]) == 0
        capsys.readouterr()

        code, data = run_json(capsys, ["verify", str(out), "--json"])

        assert code == 0
        assert data["ok"] is True
        assert data["leaves"] == ["me,"]

    def test_verify_wrong_word(self, capsys, isolated_cwd):
        out = isolated_cwd / "proof.json"
        main(["prove", TRUST_SENTENCE, "--index", "2", "--out", str(out)])
        capsys.readouterr()

        code, data = run_json(capsys, ["verify", str(out), "--word", "you", "--json"])

        assert code == 2
        assert data["ok"] is False
        assert data["error_code"] == "MERKLE_PROOF_INVALID"

    def test_verify_hex_root_override(self, capsys, isolated_cwd):
        out = isolated_cwd / "proof.json"
        main(["prove", TRUST_SENTENCE, "--index", "0", "--out", str(out)])
        capsys.readouterr()

        assert main(["verify", str(out), "--root", to_hex(TRUST_ROOT)]) == 0
        assert main(["verify", str(out), "--root", str(TRUST_ROOT + 1)]) == 2

    def test_prove_out_of_range(self, capsys):
        assert main(["prove", TRUST_SENTENCE, "--index", "4"]) == 1
        assert "out of range" in capsys.readouterr().err

    def test_verify_missing_bundle(self, capsys):
        assert main(["verify", "absent.json"]) == 1

    def test_verify_malformed_bundle(self, capsys, isolated_cwd):
        path = isolated_cwd / "bad.json"
        path.write_text(json.dumps({"root": 1, "proof": [{"Left": 1, "Right": 2}]}))

        assert main(["verify", str(path), "--word", "x"]) == 1


class TestMultiproveAndVerify:
    """merkle multiprove / merkle verify-multi"""

    def test_multiprove_json(self, capsys):
        code, data = run_json(
            capsys, ["multiprove", EIGHT_WORD_SENTENCE, "--indices", "0,1,6", "--json"]
        )

        assert code == 0
        assert data == {
            "root": EIGHT_WORD_ROOT,
            "leaf_indices": [0, 1, 6],
            "hashes": EIGHT_WORD_HASHES,
            "leaves": ["Here's", "an", "for"],
        }

    def test_multiprove_then_verify(self, capsys, isolated_cwd):
        out = isolated_cwd / "multi.json"
        assert main(["multiprove", EIGHT_WORD_SENTENCE, "--indices", "0,1,6", "--out", str(out)]) == 0
        capsys.readouterr()

        assert main(["verify-multi", str(out)]) == 0
        assert main(["verify-multi", str(out), "--words", "Here's an for"]) == 0
        assert main(["verify-multi", str(out), "--words", "Here's an against"]) == 2

    def test_multiprove_padding_leaves(self, capsys):
        _, data = run_json(capsys, ["multiprove", "a b c", "--indices", "3", "--json"])
        assert data["leaves"] == [""]

    def test_multiprove_duplicates(self, capsys):
        assert main(["multiprove", EIGHT_WORD_SENTENCE, "--indices", "1,1"]) == 1
        assert "Duplicate" in capsys.readouterr().err

    def test_multiprove_out_of_range(self, capsys):
        assert main(["multiprove", EIGHT_WORD_SENTENCE, "--indices", "0,8"]) == 1

    def test_parse_indices(self):
        assert parse_indices("0,1,6") == [0, 1, 6]
        assert parse_indices("0, 1 ,6") == [0, 1, 6]

    def test_bad_index_list_exits(self):
        with pytest.raises(SystemExit):
            main(["multiprove", "a b", "--indices", "0,x"])


class TestCompareAndSample:
    """merkle compare / merkle sample"""

    def test_compare_json(self, capsys):
        code, data = run_json(
            capsys,
            ["compare", "--length", "64", "--num-proofs", "16", "--seed", "3",
             "--target-ratio", "2.0", "--json"],
        )

        assert code == 0
        assert data["length"] == 64
        assert data["compact_size"] <= data["individual_size"]
        assert data["target_ratio"] == 2.0
        assert "breakpoint" in data

    def test_compare_too_many_proofs(self, capsys):
        assert main(["compare", "--length", "4", "--num-proofs", "5"]) == 1

    def test_sample_words(self, capsys):
        assert main(["sample", "--words", "5", "--seed", "1"]) == 0
        assert len(capsys.readouterr().out.split()) == 5

    def test_sample_words_to_file(self, capsys, isolated_cwd):
        out = isolated_cwd / "words.txt"
        assert main(["sample", "--words", "12", "--seed", "1", "--out", str(out)]) == 0
        assert len(out.read_text().split()) == 12

    def test_sample_files(self, capsys, isolated_cwd):
        assert main(["sample", "--files", "data"]) == 0

        written = sorted(p.name for p in (isolated_cwd / "data").iterdir())
        assert written == ["file1.txt", "file2.txt", "file3.txt"]


class TestConfigCommand:
    """merkle config"""

    def test_init_and_show(self, capsys, isolated_cwd):
        assert main(["config", "--init"]) == 0
        assert (isolated_cwd / "merkle.json").exists()
        capsys.readouterr()

        code, data = run_json(capsys, ["config", "--show"])
        assert code == 0
        assert data["hash_algorithm"] == "siphash13"

    def test_init_refuses_overwrite(self, capsys):
        main(["config", "--init"])
        assert main(["config", "--init"]) == 1

    def test_no_command(self, capsys):
        assert main([]) == 1


class _InProcessHttp:
    """HttpClient stand-in that forwards to a TestClient."""

    def __init__(self, test_client: TestClient) -> None:
        self._client = test_client

    def _wrap(self, response) -> HttpResponse:
        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            url=str(response.url),
        )

    def get(self, path, **kwargs):
        return self._wrap(self._client.get(path))

    def post(self, path, *, json=None, **kwargs):
        return self._wrap(self._client.post(path, json=json))

    def close(self):
        pass


class TestClientCommands:
    """merkle client upload / verify against an in-process server."""

    @pytest.fixture
    def server(self, clean_env):
        store = FileStore()
        test_client = TestClient(create_app(store))
        clean_env.setattr(client_cmd, "HttpClient", lambda *a, **kw: _InProcessHttp(test_client))
        return store

    @pytest.fixture
    def sample_paths(self, capsys, isolated_cwd):
        main(["sample", "--files", "data"])
        capsys.readouterr()
        return sorted(str(p) for p in (isolated_cwd / "data").iterdir())

    def test_upload_stores_local_root(self, capsys, server, sample_paths, isolated_cwd):
        code, data = run_json(capsys, ["client", "upload", *sample_paths, "--json"])

        contents = {p.rsplit("/", 1)[-1]: open(p).read() for p in sample_paths}
        expected = root_of([str(hash_word(contents[n])) for n in sorted(contents)])

        assert code == 0
        assert data["local_root"] == expected
        assert data["roots_match"] is True
        assert from_le_bytes((isolated_cwd / "merkle_root.bin").read_bytes()) == expected

    def test_upload_then_verify(self, capsys, server, sample_paths):
        main(["client", "upload", *sample_paths])
        capsys.readouterr()

        code, data = run_json(
            capsys, ["client", "verify", "file1.txt", "file2.txt", "file3.txt", "--json"]
        )

        assert code == 0
        assert data["ok"] is True
        assert [c["filename"] for c in data["checks"]] == ["file1.txt", "file2.txt", "file3.txt"]

    def test_verify_multi(self, capsys, server, sample_paths):
        main(["client", "upload", *sample_paths])
        capsys.readouterr()

        code, data = run_json(capsys, ["client", "verify", "file3.txt", "file1.txt", "--multi", "--json"])

        assert code == 0
        assert data["mode"] == "multi"

    def test_tampered_server_fails(self, capsys, server, sample_paths):
        main(["client", "upload", *sample_paths])
        server.upload({"file2.txt": "tampered"})
        capsys.readouterr()

        code, data = run_json(capsys, ["client", "verify", "file2.txt", "--json"])

        assert code == 2
        assert data["ok"] is False

    def test_unknown_file_fails(self, capsys, server, sample_paths):
        main(["client", "upload", *sample_paths])
        capsys.readouterr()

        assert main(["client", "verify", "missing.txt"]) == 2

    def test_custom_root_file(self, capsys, server, sample_paths, isolated_cwd):
        root_file = isolated_cwd / "roots" / "trusted.bin"
        main(["client", "--root-file", str(root_file), "upload", *sample_paths])

        assert len(root_file.read_bytes()) == 8

    def test_verify_without_root_file(self, capsys, server):
        assert main(["client", "verify", "file1.txt"]) == 1

    def test_upload_missing_path(self, capsys, server):
        assert main(["client", "upload", "nope.txt"]) == 1
