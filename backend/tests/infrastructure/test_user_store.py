"""User Store — tests for htpasswd-backed credential checks."""

from passlib.apache import HtpasswdFile

from board.infrastructure.user_store import HtpasswdUserStore


def _store() -> HtpasswdUserStore:
    htpasswd = HtpasswdFile(new=True, default_scheme="apr_md5_crypt")
    htpasswd.set_password("alice", "secret")
    return HtpasswdUserStore(htpasswd)


def test_check_accepts_correct_password():
    assert _store().check("alice", "secret")


def test_check_rejects_wrong_password():
    assert not _store().check("alice", "nope")


def test_check_rejects_unknown_user():
    assert not _store().check("mallory", "secret")


def test_file_store_reads_htpasswd(tmp_path):
    path = tmp_path / "users.htpasswd"
    htpasswd = HtpasswdFile(str(path), new=True, default_scheme="apr_md5_crypt")
    htpasswd.set_password("bob", "pw")
    htpasswd.save()

    store = HtpasswdUserStore.from_path(str(path))
    assert store.check("bob", "pw")
    assert store.users() == ["bob"]


def test_missing_file_means_no_users(tmp_path):
    store = HtpasswdUserStore.from_path(str(tmp_path / "missing.htpasswd"))
    assert not store.check("bob", "pw")
    assert store.users() == []
