# credenta

A small credential library that keeps users and groups as JSON files on disk.

Each user and group belongs to a *realm* and carries:

- role flags, stored as a list of 64-bit masks (new records get ten masks,
  so roles 0 to 639),
- typed attributes (a name, a value type label and the value as a string),
- for users, a password verification, an id type and `enable` / `active` flags.

Group roles are inherited: `CredentaStore.role_masks_of_group` combines a
group's masks with those of all its parent groups (cycles are cut off), and
`CredentaStore.get_user_with_auth` combines a user's own masks with those of
every group the user belongs to.

## Installation

```
pip install credenta
```

Argon2id hashing comes from `pynacl`, which is installed as a dependency.

## Modules

| Module               | Contents                                                                 |
|----------------------|--------------------------------------------------------------------------|
| `credenta.bits`      | `role_position`, `is_bit_on`, `set_bit_on`, `set_bit_off`, `has_role`, `add_role`, `remove_role` |
| `credenta.attributes`| `Attribute`, the `Attributable` interface, `AttributeError_`             |
| `credenta.hashing`   | `VerificationMethod`, `make_verification`, `match_verification`          |
| `credenta.policy`    | `PassphrasePolicy`, `PolicyViolation` and the three policy factories     |
| `credenta.group`     | `Group`                                                                  |
| `credenta.user`      | `User`, `IdType`                                                         |
| `credenta.store`     | `CredentaStore`, `StoreError`                                            |

## Storage layout

`CredentaStore.from_env()` reads its settings from the environment (or from a
mapping passed as `environ`):

| Variable                  | Default       | Meaning                                    |
|---------------------------|---------------|--------------------------------------------|
| `CREDENTA_BASE_DIR`       | `.`           | Prefix for the data directories            |
| `CREDENTA_USER_DIR`       | `/data/user`  | User directory, appended to the base       |
| `CREDENTA_GROUP_DIR`      | `/data/group` | Group directory, appended to the base      |
| `CREDENTA_REALM_DEFAULT`  | `DEFAULT`     | Realm used by the `*_default_*` methods    |
| `CREDENTA_PASS_POLICY`    | `SIMPLE`      | `SIMPLE`, `STRONG` or `CLASSIC`; anything else means `SIMPLE` |

Unset variables are logged at INFO level. Both directories must already exist;
otherwise `StoreError` is raised. Records are stored as `<id>_IN_<realm>.json`
inside them. A `CredentaStore` can also be built directly with the same
fields (`default_realm`, `pass_policy`, `base_folder`, `user_folder`,
`group_folder`), in which case nothing is checked up front.

## Password policies

```python
from credenta.policy import simple_password_policy, classic_password_policy, PolicyViolation

password = "password"
simple_password_policy().is_password_valid(password)    # True: one word, 8+ characters

try:
    classic_password_policy().validate(password)
except PolicyViolation as exc:
    print(exc)                                           # passphrase requires upper alphabet
```

- `simple_password_policy()`: one word of at least 8 characters.
- `strong_password_policy()`: exactly three space-separated words of at least
  5 characters each, 12 characters in total.
- `classic_password_policy()`: one word of at least 8 characters containing an
  upper-case letter, a digit and a symbol.

Leading or trailing whitespace is always rejected.

## Password hashing

```python
from credenta.hashing import VerificationMethod, make_verification, match_verification

password = "password"
hashed = make_verification(VerificationMethod.ARGON, password)
match_verification(VerificationMethod.ARGON, password, hashed)   # True
```

Methods: `PLAIN`, `MD5`, `SHA1`, `SHA256`, `SHA512`, `ARGON`.
`make_verification` raises `ValueError` for an unknown method or an empty
password (except with `ARGON`); `match_verification` returns `False` for an
unknown method or a malformed hash.

Note that the `MD5`, `SHA*` methods store the hex encoding of the password
bytes followed by the digest of empty input, so the password can be read back
from the stored value. Only `ARGON` is a one-way hash.

## Users and groups

```python
from credenta.store import CredentaStore
from credenta.user import IdType
from credenta.hashing import VerificationMethod
from credenta.bits import has_role

store = CredentaStore.from_env()

elder = store.new_group("admin", "RA", "GroupElder", None)
elder.add_role(0)
elder.save("admin")

son = store.new_group("admin", "RA", "GroupSon", ["GroupElder"])
son.add_role(1)
son.save("admin")

password = "password"
user = store.new_user(
    "admin", "RA", "alice", password, ["GroupSon"],
    IdType.USER_ID, VerificationMethod.SHA256,
)
user.set_attribute("department", "string", "Engineering")
user.active = True
user.save("admin")

authenticated, roles = store.get_user_with_auth("RA", "alice", password)
has_role(roles, 0), has_role(roles, 1)   # (True, True)
```

Points to know:

- `new_user` and `new_group` return records that are **not yet saved**; call
  `save(actor)` to write them. They raise `StoreError` if the file already
  exists. New users are enabled but not active; `new_user` defaults to
  `IdType.USER_ID` and `VerificationMethod.ARGON`.
- `get_user_with_auth` raises `StoreError` for a wrong password, an inactive
  user or a disabled user.
- `change_user_password` checks the policy, rehashes and returns the loaded
  user unsaved.
- Group attribute names are matched case-insensitively and `set_attribute`
  raises `AttributeError_` for a duplicate. User attribute names are matched
  exactly and `set_attribute` leaves an existing attribute unchanged.
- `list_user_ids()` and `list_group_names()` map each realm to the ids or
  names found on disk.

## What this package does not do

- It issues no login tokens or sessions; authentication returns the user and
  its role masks only.
- It has no command-line tool and no server; it is used as a library.
- It does not stop parent-group cycles from being saved (they are only
  skipped when roles are combined), and it does no file locking.

## Running the tests

```
pip install -e ".[test]"
pytest
```