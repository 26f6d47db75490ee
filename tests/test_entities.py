import pytest

from olmresolve.resolution.entities import (
    GVK,
    MEDIA_TYPE_PLAIN,
    PROPERTY_BUNDLE_MEDIA_TYPE,
    BundleEntity,
    ChannelProperties,
    GVKRequired,
    PackageRequired,
    PropertyError,
)
from olmresolve.resolution.model import Entity
from olmresolve.resolution.versions import parse_version

EID = "operatorhub/prometheus/0.14.0"
BAD = "invalid character 'b' looking for beginning of value"


def bundle(props):
    return BundleEntity(Entity(EID, props))


def test_package_name():
    b = bundle({"olm.package": '{"packageName":"prometheus","version":"0.14.0"}'})
    assert b.package_name() == "prometheus"


def test_package_name_missing():
    with pytest.raises(PropertyError) as exc:
        bundle({}).package_name()
    assert str(exc.value) == (
        f"error determining package for entity '{EID}': required property 'olm.package' not found"
    )


def test_package_name_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.package": "badPackageNameStructure"}).package_name()
    assert str(exc.value) == (
        f"error determining package for entity '{EID}': property 'olm.package' "
        f"('badPackageNameStructure') could not be parsed: {BAD}"
    )


def test_version():
    b = bundle({"olm.package": '{"packageName":"prometheus","version":"0.14.0"}'})
    assert b.version() == parse_version("0.14.0")


def test_version_missing():
    with pytest.raises(PropertyError) as exc:
        bundle({}).version()
    assert str(exc.value) == (
        f"error determining package for entity '{EID}': required property 'olm.package' not found"
    )


def test_version_malformed_property():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.package": "badPackageStructure"}).version()
    assert str(exc.value) == (
        f"error determining package for entity '{EID}': property 'olm.package' "
        f"('badPackageStructure') could not be parsed: {BAD}"
    )


def test_version_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.package": '{"packageName":"prometheus","version":"badversion"}'}).version()
    assert str(exc.value) == (
        f"could not parse semver (badversion) for entity '{EID}': No Major.Minor.Patch elements found"
    )


GVKS = '[{"group":"foo.io","kind":"Foo","version":"v1"},{"group":"bar.io","kind":"Bar","version":"v1alpha1"}]'


def test_provided_gvks():
    assert bundle({"olm.gvk": GVKS}).provided_gvks() == [
        GVK(group="foo.io", kind="Foo", version="v1"),
        GVK(group="bar.io", kind="Bar", version="v1alpha1"),
    ]


def test_provided_gvks_missing():
    assert bundle({}).provided_gvks() == []


def test_provided_gvks_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.gvk": "badGvkStructure"}).provided_gvks()
    assert str(exc.value) == (
        f"error determining bundle provided gvks for entity '{EID}': property 'olm.gvk' "
        f"('badGvkStructure') could not be parsed: {BAD}"
    )


def test_required_gvks():
    assert bundle({"olm.gvk.required": GVKS}).required_gvks() == [
        GVKRequired(group="foo.io", kind="Foo", version="v1"),
        GVKRequired(group="bar.io", kind="Bar", version="v1alpha1"),
    ]


def test_required_gvks_missing():
    assert bundle({}).required_gvks() == []


def test_required_gvks_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.gvk.required": "badGvkStructure"}).required_gvks()
    assert str(exc.value) == (
        f"error determining bundle required gvks for entity '{EID}': property 'olm.gvk.required' "
        f"('badGvkStructure') could not be parsed: {BAD}"
    )


def test_gvk_string_and_as_gvk():
    req = GVKRequired("foo.io", "v1", "Foo")
    assert req.as_gvk() == GVK("foo.io", "v1", "Foo")
    assert str(req.as_gvk()) == 'group:"foo.io" version:"v1" kind:"Foo"'


def test_required_packages():
    b = bundle(
        {
            "olm.package.required": '[{"packageName": "packageA", "versionRange": ">1.0.0"}, '
            '{"packageName": "packageB", "versionRange": ">0.5.0 <0.8.6"}]'
        }
    )
    assert b.required_packages() == [
        PackageRequired("packageA", ">1.0.0"),
        PackageRequired("packageB", ">0.5.0 <0.8.6"),
    ]


def test_required_packages_missing():
    assert bundle({}).required_packages() == []


def test_required_packages_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.package.required": "badRequiredPackageStructure"}).required_packages()
    assert str(exc.value) == (
        f"error determining bundle required packages for entity '{EID}': property "
        f"'olm.package.required' ('badRequiredPackageStructure') could not be parsed: {BAD}"
    )


def test_channel_name():
    assert bundle({"olm.channel": '{"channelName":"beta","priority":0}'}).channel_name() == "beta"


@pytest.mark.parametrize("method", ["channel_name", "channel_properties"])
def test_channel_missing(method):
    with pytest.raises(PropertyError) as exc:
        getattr(bundle({}), method)()
    assert str(exc.value) == (
        f"error determining bundle channel properties for entity '{EID}': "
        "required property 'olm.channel' not found"
    )


@pytest.mark.parametrize("method", ["channel_name", "channel_properties"])
def test_channel_malformed(method):
    with pytest.raises(PropertyError) as exc:
        getattr(bundle({"olm.channel": "badChannelPropertiesStructure"}), method)()
    assert str(exc.value) == (
        f"error determining bundle channel properties for entity '{EID}': property 'olm.channel' "
        f"('badChannelPropertiesStructure') could not be parsed: {BAD}"
    )


def test_channel_properties():
    b = bundle(
        {
            "olm.channel": '{"channelName":"beta","priority":0, "replaces": "bundle.v1.0.0", '
            '"skips": ["bundle.v0.9.0", "bundle.v0.9.6"], "skipRange": ">=0.9.0 <=0.9.6"}'
        }
    )
    assert b.channel_properties() == ChannelProperties(
        channel_name="beta",
        priority=0,
        replaces="bundle.v1.0.0",
        skips=["bundle.v0.9.0", "bundle.v0.9.6"],
        skip_range=">=0.9.0 <=0.9.6",
    )


def test_bundle_path():
    assert bundle({"olm.bundle.path": '"bundle.io/path/to/bundle"'}).bundle_path() == "bundle.io/path/to/bundle"


def test_bundle_path_missing():
    with pytest.raises(PropertyError) as exc:
        bundle({}).bundle_path()
    assert str(exc.value) == (
        f"error determining bundle path for entity '{EID}': required property 'olm.bundle.path' not found"
    )


def test_bundle_path_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({"olm.bundle.path": "badBundlePath"}).bundle_path()
    assert str(exc.value) == (
        f"error determining bundle path for entity '{EID}': property 'olm.bundle.path' "
        f"('badBundlePath') could not be parsed: {BAD}"
    )


def test_media_type():
    b = bundle({PROPERTY_BUNDLE_MEDIA_TYPE: f'"{MEDIA_TYPE_PLAIN}"'})
    assert b.media_type() == MEDIA_TYPE_PLAIN


def test_media_type_missing():
    assert bundle({}).media_type() == ""


def test_media_type_malformed():
    with pytest.raises(PropertyError) as exc:
        bundle({PROPERTY_BUNDLE_MEDIA_TYPE: "badtype"}).media_type()
    assert str(exc.value) == (
        f"error determining bundle mediatype for entity '{EID}': property 'olm.bundle.mediatype' "
        f"('badtype') could not be parsed: {BAD}"
    )


def test_equality_by_entity():
    assert bundle({"a": "1"}) == bundle({"a": "1"})
    assert bundle({}).id == EID