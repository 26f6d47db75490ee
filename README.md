# olmresolve

`olmresolve` has two parts:

* `olmresolve.resolution`: the pieces used to turn a catalog of operator
  bundles into solver variables. These are bundle entities with lazily decoded
  properties, semantic versions and version ranges, entity predicates, a
  deterministic ordering, and variable sources that find required packages,
  follow their dependencies and add uniqueness constraints.
* `olmresolve.commitchecker`: a small tool that reads a range of git commits
  and checks that every commit summary follows the `UPSTREAM:` convention and
  that no commit was authored from a `root@…` address.

It needs Python 3.10 or later and has no runtime dependencies. The commit
checker runs the `git` command, which must be on the `PATH`.

## Installation

```
pip install olmresolve
```

To run the test suite:

```
pip install "olmresolve[test]"
pytest
```

## Checking commits

```
commitchecker --start master --end HEAD
```

The single-dash spellings `-start` and `-end` are accepted too. The command
looks at every commit in `start..end` (the defaults are `master` and `HEAD`)
and prints each problem it finds to standard error, followed by a blank line.
The exit status tells you the result:

| status | meaning |
|--------|---------|
| 0 | every commit passed, or one of the revisions does not exist (a warning is printed) |
| 1 | the commit range could not be read |
| 2 | at least one commit failed validation |

An accepted summary looks like one of these:

```
UPSTREAM: 12345: A kube fix
UPSTREAM: <carry>: A carried kube change
UPSTREAM: <drop>: A dropped kube change
UPSTREAM: revert: 12345: A kube revert
UPSTREAM: coreos/etcd: <carry>: a change
```

The summaries of merge commits (`Merge commit …`) are not checked; their
author address still is.

The same checks are available from Python. `commits_between(start, end)` in
`olmresolve.commitchecker.git` returns `Commit` objects (sha, summary,
description lines, changed `File`s and author e-mail). Pass each one to
`validate_commit_author` and `validate_commit_message` from
`olmresolve.commitchecker.validate`; each returns a list of problem messages,
empty when the commit is fine. If a revision does not exist, `commits_between`
raises `NotCommitError`; other git failures raise `GitError`.

`Commit` and `File` also answer questions about vendored code:
`has_vendored_code_changes()`, `has_non_vendored_code_changes()`,
`has_patches()`, `has_bumped_files()`, `patched_repos()`,
`declared_upstream_repo()` and `File.vendor_repo()`. The module further offers
`is_commit`, `fetch_repo`, `is_ancestor`, `commit_date`, `checkout` and
`current_rev`, which run git in a given repository directory and raise
`GitError` when it fails.

## Resolution building blocks

Bundle data is stored as JSON encoded properties on an `Entity`. For example,
`olm.package` holds `{"packageName": "prometheus", "version": "0.47.0"}`,
`olm.channel` holds the channel, and `olm.gvk` holds the provided group, version
and kind triples. `BundleEntity` (in `olmresolve.resolution.entities`) wraps an
entity and decodes these properties when you first ask for them. Its methods
are `package_name()`, `version()`, `provided_gvks()`, `required_gvks()`,
`required_packages()`, `channel_name()`, `channel_properties()`,
`bundle_path()` and `media_type()`. It raises `PropertyError` when a required
property is missing, a property is not valid JSON, or a version or version
range in it cannot be parsed. Missing optional properties give an empty list
or an empty string.

Versions and ranges are in `olmresolve.resolution.versions`. Use
`parse_version("1.2.3")` to read a version and `parse_range(">=1.0.0 <2.0.0")`
to read a range, then test with `version in version_range`. Ranges accept the
comparisons `>`, `>=`, `<`, `<=`, `=`, `==`, `!=` and `!`, alternatives joined
with `||`, and wildcards such as `1.x` or `1.2.*`. Invalid input raises
`SemverError`.

Entities are looked up through an entity source. `CacheQuerier` (in
`olmresolve.resolution.model`) keeps entities in memory and supports `get`,
`filter`, `group_by` and `iterate`. The predicates in
`olmresolve.resolution.predicates` can be passed to `filter`:
`with_package_name`, `in_semver_range`, `in_channel` and `provides_gvk`.
Combine them with `all_of`.

`olmresolve.resolution.ordering.sort_entities` orders entities

* by package name,
* then by channel priority (lower first) and channel name,
* then from the highest version to the lowest.

An entity that is missing one of these properties goes after the entities
that have it. `compare_by_channel_and_version` and `by_channel_and_version`
expose the same comparison.

The variable sources each have a `get_variables(entity_source)` method:

* `RequiredPackageVariableSource` produces a `RequiredPackageVariable` with
  every matching bundle of a package, highest version first. Narrow it with
  the options `in_version_range` and `in_channel`. It raises `LookupError`
  when nothing matches.
* `BundlesAndDepsVariableSource` starts from the required packages and visits
  their package and GVK dependencies breadth first, adding one
  `BundleVariable` for each bundle it reaches. It raises `LookupError` when a
  dependency cannot be found.
* `CRDUniquenessConstraintsVariableSource` adds `BundleUniquenessVariable`
  constraints allowing at most one bundle per package and at most one bundle
  per provided GVK.
* `SliceVariableSource` joins the output of several sources into one list.
  `NestedVariableSource` builds a chain of sources, each wrapping the one
  before it.

The constraints attached to variables are `Mandatory`, `Dependency` and
`AtMost`, built with `mandatory()`, `dependency(...)` and `at_most(n, ...)`.

## What it does not do

The package produces variables and constraints but contains no solver that
picks a set of bundles from them. It does not read catalogs or installed
operators from a cluster; entity sources such as `CacheQuerier` must be filled
by the caller.