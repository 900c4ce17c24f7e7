"""File-backed store of users and groups, organised by realm."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .group import _ZERO_TIME, Group, _now
from .hashing import VerificationMethod, make_verification, match_verification
from .policy import (
    PassphrasePolicy,
    PolicyViolation,
    classic_password_policy,
    simple_password_policy,
    strong_password_policy,
)
from .user import IdType, User

ROLE_MASK_COUNT = 10

_log = logging.getLogger(__name__)

_POLICIES = {
    "SIMPLE": simple_password_policy,
    "STRONG": strong_password_policy,
    "CLASSIC": classic_password_policy,
}


class StoreError(Exception):
    """Raised when a store operation cannot be carried out."""


def _env_value(
    environ: Mapping[str, str], name: str, default: str, options: Sequence[str] = ()
) -> str:
    if name in environ:
        return environ[name]
    if options:
        _log.info(
            '%s environment variable not set. Set to default value "%s". Options are %s.',
            name,
            default,
            ",".join(options),
        )
    else:
        _log.info('%s environment variable not set. Set to default value "%s".', name, default)
    return default


def _merge_masks(first: Sequence[int], second: Sequence[int]) -> list[int]:
    length = max(len(first), len(second))
    padded_first = list(first) + [0] * (length - len(first))
    padded_second = list(second) + [0] * (length - len(second))
    return [a | b for a, b in zip(padded_first, padded_second)]


@dataclass
class CredentaStore:
    """Users and groups kept as ``<id>_IN_<realm>.json`` files under two folders."""

    default_realm: str = "DEFAULT"
    pass_policy: PassphrasePolicy = field(default_factory=simple_password_policy)
    base_folder: str = "."
    user_folder: str = "/data/user"
    group_folder: str = "/data/group"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CredentaStore:
        """Configure a store from CREDENTA_* variables; both data folders must exist."""
        env = os.environ if environ is None else environ
        base_folder = _env_value(env, "CREDENTA_BASE_DIR", ".")
        user_folder = _env_value(env, "CREDENTA_USER_DIR", "/data/user")
        group_folder = _env_value(env, "CREDENTA_GROUP_DIR", "/data/group")
        default_realm = _env_value(env, "CREDENTA_REALM_DEFAULT", "DEFAULT")
        policy_name = _env_value(env, "CREDENTA_PASS_POLICY", "SIMPLE", tuple(_POLICIES))
        policy = _POLICIES.get(policy_name, simple_password_policy)()

        store = cls(
            default_realm=default_realm,
            pass_policy=policy,
            base_folder=base_folder,
            user_folder=user_folder,
            group_folder=group_folder,
        )
        if not Path(store._user_dir).exists():
            raise StoreError(
                f'could not find user directory "{store._user_dir}". Please create the directory '
                "or change the environment variable CREDENTA_BASE_DIR and/or CREDENTA_USER_DIR "
                "and try again"
            )
        if not Path(store._group_dir).exists():
            raise StoreError(
                f'could not find group directory "{store._group_dir}". Please create the directory '
                "or change the environment variable CREDENTA_BASE_DIR and/or CREDENTA_GROUP_DIR "
                "and try again"
            )
        return store

    @property
    def _user_dir(self) -> str:
        return f"{self.base_folder}{self.user_folder}"

    @property
    def _group_dir(self) -> str:
        return f"{self.base_folder}{self.group_folder}"

    def _user_path(self, realm: str, user_id: str) -> str:
        return f"{self._user_dir}/{user_id}_IN_{realm}.json"

    def _group_path(self, realm: str, name: str) -> str:
        return f"{self._group_dir}/{name}_IN_{realm}.json"

    def _hash_password(self, method: VerificationMethod | str, password: str) -> str:
        try:
            self.pass_policy.validate(password)
        except PolicyViolation as exc:
            raise StoreError("invalid password format") from exc
        try:
            return make_verification(method, password)
        except ValueError as exc:
            raise StoreError(str(exc)) from exc

    def role_masks_of_group(self, realm: str, group: str) -> list[int]:
        """Return the group's role masks combined with those of all its ancestors.

        A group that cannot be loaded contributes empty masks.
        """
        return self._collect_group_masks(realm, group, frozenset())

    def _collect_group_masks(self, realm: str, name: str, seen: frozenset[str]) -> list[int]:
        empty = [0] * ROLE_MASK_COUNT
        if name in seen:
            return empty
        try:
            the_group = self.get_group(realm, name)
        except StoreError:
            return empty
        masks = list(the_group.role_masks)
        visited = seen | {name}
        for parent in the_group.parent_groups:
            masks = _merge_masks(masks, self._collect_group_masks(realm, parent, visited))
        return masks

    def new_default_group(
        self, actor: str, name: str, parent_groups: Iterable[str] | None = None
    ) -> Group:
        """Create an unsaved group in the default realm."""
        return self.new_group(actor, self.default_realm, name, parent_groups)

    def new_group(
        self,
        actor: str,
        realm: str,
        name: str,
        parent_groups: Iterable[str] | None = None,
    ) -> Group:
        """Create an unsaved group; raise StoreError if one already exists."""
        if not realm or not name:
            raise StoreError("realm and name is required")
        path = self._group_path(realm, name)
        if Path(path).exists():
            raise StoreError("group already exists")
        now = _now()
        return Group(
            realm=realm,
            name=name,
            parent_groups=list(parent_groups or []),
            attributes=[],
            role_masks=[0] * ROLE_MASK_COUNT,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
            file_path=path,
        )

    def change_user_password(
        self,
        realm: str,
        user_id: str,
        password: str,
        method: VerificationMethod | str,
    ) -> User:
        """Load a user and give it a new verification; the user is returned unsaved."""
        user = self.get_user(realm, user_id)
        user.verification_hash = self._hash_password(method, password)
        user.verification_method = method
        return user

    def new_default_user(
        self,
        actor: str,
        user_id: str,
        password: str,
        groups: Iterable[str] | None = None,
        id_type: IdType | str = IdType.USER_ID,
        method: VerificationMethod | str = VerificationMethod.ARGON,
    ) -> User:
        """Create an unsaved user in the default realm."""
        return self.new_user(actor, self.default_realm, user_id, password, groups, id_type, method)

    def new_user(
        self,
        actor: str,
        realm: str,
        user_id: str,
        password: str,
        groups: Iterable[str] | None = None,
        id_type: IdType | str = IdType.USER_ID,
        method: VerificationMethod | str = VerificationMethod.ARGON,
    ) -> User:
        """Create an unsaved, enabled but inactive user; raise StoreError if it exists."""
        if not realm or not user_id or not password:
            raise StoreError("in new_user: realm, id and password is required")
        verification = self._hash_password(method, password)
        path = self._user_path(realm, user_id)
        if Path(path).exists():
            raise StoreError("user already exists")
        return User(
            realm=realm,
            user_id=user_id,
            id_type=id_type,
            groups=list(groups or []),
            attributes={},
            role_masks=[0] * ROLE_MASK_COUNT,
            verification_method=method,
            verification_hash=verification,
            enable=True,
            active=False,
            created_at=_ZERO_TIME,
            created_by=actor,
            updated_at=_ZERO_TIME,
            updated_by=actor,
            file_path=path,
        )

    def get_default_group(self, name: str) -> Group:
        """Load a group of the default realm."""
        return self.get_group(self.default_realm, name)

    def get_group(self, realm: str, name: str) -> Group:
        """Load a group from its file."""
        if not realm or not name:
            raise StoreError("in get_group: realm and name are required")
        group = Group(file_path=self._group_path(realm, name))
        try:
            group.reload()
        except (OSError, ValueError) as exc:
            raise StoreError(f"error loading group file {group.file_path}: {exc}") from exc
        return group

    def get_default_user(self, user_id: str) -> User:
        """Load a user of the default realm."""
        return self.get_user(self.default_realm, user_id)

    def get_user(self, realm: str, user_id: str) -> User:
        """Load a user from its file."""
        if not realm or not user_id:
            raise StoreError("in get_user: realm and id are required")
        user = User(file_path=self._user_path(realm, user_id))
        try:
            user.reload()
        except (OSError, ValueError) as exc:
            raise StoreError(f"error loading user file {user.file_path}: {exc}") from exc
        return user

    def get_default_user_with_auth(self, user_id: str, password: str) -> tuple[User, list[int]]:
        """Authenticate a user of the default realm."""
        return self.get_user_with_auth(self.default_realm, user_id, password)

    def get_user_with_auth(
        self, realm: str, user_id: str, password: str
    ) -> tuple[User, list[int]]:
        """Authenticate a user and return it with its effective role masks.

        The effective masks combine the user's own masks with those of its groups.
        """
        if not realm or not user_id or not password:
            raise StoreError("in get_user_with_auth: realm and id and password are required")
        try:
            user = self.get_user(realm, user_id)
        except StoreError as exc:
            raise StoreError(f"in get_user_with_auth: {exc}") from exc
        if not match_verification(user.verification_method, password, user.verification_hash):
            raise StoreError("invalid authentication")
        if not user.active:
            raise StoreError("in get_user_with_auth: user is not activated")
        if not user.enable:
            raise StoreError("in get_user_with_auth: user is disabled")
        masks = list(user.role_masks)
        for group in user.groups:
            masks = _merge_masks(masks, self.role_masks_of_group(realm, group))
        return user, masks

    def list_user_ids(self) -> dict[str, list[str]]:
        """Map each realm to the ids of the users stored in it."""
        return self._list_data_files(self._user_dir)

    def list_group_names(self) -> dict[str, list[str]]:
        """Map each realm to the names of the groups stored in it."""
        return self._list_data_files(self._group_dir)

    @staticmethod
    def _list_data_files(folder: str) -> dict[str, list[str]]:
        directory = Path(folder)
        if not directory.exists():
            raise StoreError(f"folder {folder} not exists")
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise StoreError(f"error reading directory {folder}: {exc}") from exc
        result: dict[str, list[str]] = {}
        for entry in entries:
            if entry.is_dir() or not entry.name.endswith(".json"):
                continue
            stem = entry.name.split(".")[0]
            parts = stem.split("_IN_")
            if len(parts) < 2:
                continue
            entity_id, realm = parts[0], parts[1]
            result.setdefault(realm, []).append(entity_id)
        return result