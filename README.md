# panpcs

Building blocks for writing a client of a personal cloud storage service
that exposes a "PCS" REST interface and a web ("pan") interface. It gives
you the pieces a client needs around its HTTP layer:

- typed errors for the three response families the service returns,
- request signatures (device id, `locatedownload` signing, share-info
  signing and the RC4-style web signature),
- an expiring, per-key locked cache for results such as directory listings,
- parsers that turn the service's JSON replies and share pages into Python
  objects,
- a small compiler wrapper for the Android NDK.

It needs Python 3.10 or newer and has no third-party dependencies.

## Installation

```
pip install panpcs
```

For running the test suite:

```
pip install "panpcs[test]"
pytest
```

## Modules

| Module | What it holds |
| --- | --- |
| `panpcs.errors` | `ErrType`, `BaseErrorInfo`, `PCSErrInfo`, `PanErrorInfo`, `DlinkErrInfo`, `find_pcs_err`, `find_pan_err`, `handle_json_parse`, `decode_pcs_json_error`, `decode_pan_json_error` |
| `panpcs.expires` | `Expires` and `DataExpires`: a deadline that can also be forced to expire |
| `panpcs.cachemap` | `CacheUnit` and `CacheOpMap`: expiring caches grouped by operation |
| `panpcs.netdisksign` | `dev_uid`, `LocateDownloadSign`, `share_surl_info_sign`, `sign2` |
| `panpcs.util` | `merge_string_list`, `merge_int64_list`, `all_related_dir`, `create_passwd`, `get_http_scheme`, `public_suffix` |
| `panpcs.jsontable` | `CpMv`, `paths_list_json`, `fs_id_list_json`, `block_list_json`, `cp_mv_list_json`, `cp_mv_related_dirs` |
| `panpcs.filedir` | `FileDirectory`, `OrderBy`, `Order`, `OrderOptions`, `parse_file_directory_list`, `total_size`, `count`, `all_file_paths` |
| `panpcs.download` | `URLInfo`, `DlinkInfo`, `parse_dlink_list` |
| `panpcs.recycle` | `RecycleFDInfo`, `parse_recycle_list`, `parse_recycle_restore`, `parse_recycle_clear` |
| `panpcs.clouddl` | `CloudDlTaskInfo`, `CloudDlFileInfo`, `status_text`, `parse_query_task`, `parse_list_task_ids`, `format_task_list` |
| `panpcs.upload` | `RapidUploadInfo`, `UploadSeq`, `PrecreateInfo`, `randomify_md5`, `parse_upload_response`, `parse_tmpfile_response`, `parse_precreate`, `check_rapid_upload_v2` |
| `panpcs.transfer` | `generate_share_query_url`, `extract_share_info`, `parse_share_page`, `parse_post_share_query`, `parse_transfer_response` |
| `panpcs.panhome` | `PanHome`, `SignRes`, `parse_sign_info` |
| `panpcs.ndkbuild` | `get_ndk_path`, `get_api_level`, `get_arch`, `get_platforms_arch` and `main`, behind the `panpcs-ndk-gcc` command |

## Errors

Every failure is raised as a subclass of `BaseErrorInfo`, which is an
`Exception`. The error carries the operation name, an `ErrType` telling
whether the failure was internal, a network problem, a JSON parse failure,
a remote error code or something else, and the remote code and message
(`remote_err_code`, `remote_err_msg`) where there is one.

`handle_json_parse` decodes a response (bytes, text or anything with a
`read()` method). On success it returns the decoded object; when the JSON
cannot be parsed, or the server reports a nonzero code, it raises the error
object it was given.

```python
from panpcs.errors import decode_pcs_json_error, PCSErrInfo

try:
    decode_pcs_json_error("remove", b'{"error_code": 31066, "error_msg": "file does not exist"}')
except PCSErrInfo as err:
    print(err)
```

Known PCS codes such as 31045, 31061, 31066 and 31079, and the web
interface's `errno` values, are translated into readable messages by
`find_pcs_err` and `find_pan_err`.

## Signatures

```python
from panpcs.netdisksign import LocateDownloadSign, dev_uid, share_surl_info_sign, sign2

devuid = dev_uid("token")
sign = LocateDownloadSign.create(10086, "token", 1571140066, devuid)
query = sign.url_param()        # time=...&rand=...&devuid=...&cuid=...

share_sign = share_surl_info_sign(12345)
```

`sign2(key, data)` is the RC4 stream cipher used by the web interface to
sign download requests. `PanHome.signature` fetches its inputs from the
home page and returns a `SignRes` (base64 signature and timestamp);
`PanHome.cache_signature` keeps the result for an hour, and
`PanHome.set_sign_expires` forces it to be renewed on next use. `PanHome`
takes either a `fetch(url, headers) -> (location, body)` callable or a
cookie string for its built-in `urllib` fetcher, which does not follow
redirects.

## Expiring cache

`Expires` takes a duration in seconds or a `timedelta`; `Expires.at` takes
a `datetime`. `DataExpires` pairs a value with such a deadline.

`CacheOpMap` keeps one `CacheUnit` per operation. `cache_operation` looks a
key up and, on a miss, calls your function while holding a lock for that
key, so that concurrent callers asking for the same key run it only once.
A `None` result is returned but not cached. Entries whose deadline has
passed are never returned; `clear_invalidate` drops them from every unit.

## Compiler wrapper

`panpcs-ndk-gcc` runs the Android NDK's gcc with a matching `--sysroot`,
passing every other argument through and exiting with gcc's status. The
NDK is located from `NDK`, `ANDROID_NDK_ROOT` or `ANDROID_NDK_DIR`; the API
level from `ANDROID_API_LEVEL` (default 21); the architecture from `GOARCH`
or the host machine. It fails with "no match gcc" when no toolchain gcc is
found.

```
panpcs-ndk-gcc -c hello.c -o hello.o
```

## What it does not do

The package holds no client object that sends the file-operation requests
(listing, upload, download, copy, move, share, offline download) to the
service; you build those requests and hand the replies to the parsers
above. Apart from `PanHome`'s home-page fetch it opens no network
connections, and it has no command-line client for the storage service.