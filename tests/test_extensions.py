import pytest

from seo_sitemap.errors import (
    InvalidExtensionValue,
    MissingRequiredFields,
    TooManyImages,
    UnsupportedExtension,
)
from seo_sitemap.extensions import validate_extensions, validate_image, validate_video
from seo_sitemap.models import ImageEntry, ImageExtension, VideoExtension, VideoPrice, VideoRelationship
from seo_sitemap.validation import validate_record

PAGE = "https://example.com/path/to/page/"


def full_video():
    return {
        "thumbnail_loc": "http://www.example.com/thumbs/123.jpg",
        "title": "Grilling steaks for summer",
        "description": "Alkis shows you how to get perfectly done steaks every time",
        "content_loc": "http://streamserver.example.com/video123.mp4",
        "player_loc": "http://www.example.com/videoplayer.php?video=123",
        "duration": 600,
        "expiration_date": "2021-11-05T19:20:30+08:00",
        "rating": 4.2,
        "view_count": 12345,
        "publication_date": "2007-11-05T19:20:30+08:00",
        "family_friendly": "yes",
        "restriction": {"relationship": "allow", "value": "IE GB US CA"},
        "platform": {"relationship": "allow", "value": "web mobile"},
        "price": [{"currency": "EUR", "value": 1.99, "type": "rent", "resolution": "hd"}],
        "requires_subscription": "yes",
        "uploader": {"info": "https://example.com/users/grillymcgrillerson", "value": "GrillyMcGrillerson"},
        "live": "no",
        "tag": ["steak", "meat", "summer", "outdoor"],
        "category": "baking",
    }


def test_video_missing_all_required_fields_lists_them_in_order():
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video({}, PAGE)
    assert str(exc.value) == "Missing required fields: thumbnail_loc, title, description"
    assert exc.value.fields == ["thumbnail_loc", "title", "description"]


def test_video_blank_required_field_counts_as_missing():
    payload = full_video()
    payload["title"] = "   "
    del payload["description"]
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video(payload, PAGE)
    assert str(exc.value) == "Missing required fields: title, description"


def test_video_requires_content_or_player_location():
    payload = full_video()
    del payload["content_loc"]
    del payload["player_loc"]
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video(payload, PAGE)
    assert "content_loc or player_loc" in str(exc.value)


def test_video_full_payload():
    video = validate_video(full_video(), PAGE)
    assert video.content_loc == ("http://streamserver.example.com/video123.mp4",)
    assert video.player_loc == "http://www.example.com/videoplayer.php?video=123"
    assert video.duration == 600
    assert video.rating == 4.2
    assert video.restriction == VideoRelationship("allow", "IE GB US CA")
    assert video.price == (VideoPrice("EUR", "1.99", "rent", "hd"),)
    assert video.uploader.info == "https://example.com/users/grillymcgrillerson"
    assert video.tag == ("steak", "meat", "summer", "outdoor")


def test_video_content_loc_list_and_single_price_mapping():
    payload = full_video()
    payload["content_loc"] = ["http://a.example.com/1.mp4", "http://a.example.com/2.mp4"]
    payload["price"] = {"currency": "usd", "value": "3"}
    payload["family_friendly"] = True
    video = validate_video(payload, PAGE)
    assert len(video.content_loc) == 2
    assert video.price == (VideoPrice("USD", "3"),)
    assert video.family_friendly == "yes"


@pytest.mark.parametrize(
    "field, value",
    [
        ("duration", 0),
        ("duration", 28801),
        ("duration", "ten"),
        ("rating", 5.1),
        ("rating", -1),
        ("view_count", -5),
        ("family_friendly", "maybe"),
        ("live", "true"),
        ("restriction", {"relationship": "block", "value": "US"}),
        ("platform", "web"),
        ("price", [{"currency": "EURO", "value": 1}]),
        ("price", [{"currency": "EUR", "value": 1, "type": "lease"}]),
        ("price", [{"currency": "EUR", "value": 1, "resolution": "4k"}]),
        ("tag", [f"t{i}" for i in range(33)]),
        ("description", "x" * 2049),
        ("player_loc", PAGE),
        ("content_loc", PAGE),
    ],
)
def test_video_invalid_values(field, value):
    payload = full_video()
    payload[field] = value
    with pytest.raises(InvalidExtensionValue):
        validate_video(payload, PAGE)


@pytest.mark.parametrize(
    "field, value, missing",
    [
        ("price", [{"value": 1}], "price.currency"),
        ("uploader", {"info": "https://example.com/u"}, "uploader.value"),
        ("restriction", {"relationship": "allow"}, "restriction.value"),
    ],
)
def test_video_nested_missing_fields(field, value, missing):
    payload = full_video()
    payload[field] = value
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video(payload, PAGE)
    assert exc.value.fields == [missing]


def test_image_single_mapping_is_normalized_to_list():
    image = validate_image({"loc": "https://www.example.com/thumbs/123.jpg", "title": "Cat vs Cabbage"}, 1000)
    assert image == ImageExtension(images=(ImageEntry("https://www.example.com/thumbs/123.jpg", "Cat vs Cabbage"),))


def test_image_list_keeps_order():
    image = validate_image([{"loc": "https://e.com/1.jpg"}, {"loc": "https://e.com/2.jpg"}], 1000)
    assert [entry.loc for entry in image.images] == ["https://e.com/1.jpg", "https://e.com/2.jpg"]


def test_image_missing_loc():
    with pytest.raises(MissingRequiredFields) as exc:
        validate_image({"foo": "bar"}, 1000)
    assert str(exc.value) == "Missing required fields: loc"


def test_image_missing_loc_on_later_entry():
    with pytest.raises(MissingRequiredFields):
        validate_image([{"loc": "https://e.com/1.jpg"}, {"title": "no loc"}], 1000)


def test_too_many_images():
    images = [{"loc": "https://www.example.com/thumbs/123.jpg"} for _ in range(1001)]
    with pytest.raises(TooManyImages) as exc:
        validate_image(images, 1000)
    assert str(exc.value) == (
        "Too many images for a single URL. Maximum number of images allowed per page is 1000, got 1001. "
        "For more information, see https://www.google.com/schemas/sitemap-image/1.1/sitemap-image.xsd"
    )
    assert (exc.value.limit, exc.value.count) == (1000, 1001)


def test_image_limit_follows_config(make_config):
    config = make_config(max_images_per_url=2)
    images = [{"loc": f"https://e.com/{i}.jpg"} for i in range(3)]
    with pytest.raises(TooManyImages, match="allowed per page is 2, got 3"):
        validate_record(config, "/page", extensions={"google_image": images})


def test_exactly_max_images_is_accepted():
    images = [{"loc": f"https://e.com/{i}.jpg"} for i in range(1000)]
    assert len(validate_image(images, 1000).images) == 1000


def test_unknown_extension_is_rejected():
    with pytest.raises(UnsupportedExtension) as exc:
        validate_extensions({"google_news": {"title": "x"}}, PAGE, 1000)
    assert "google_news" in str(exc.value)
    assert "google_video, google_image" in str(exc.value)


def test_extensions_render_order_is_fixed():
    extensions = {
        "google_image": {"loc": "https://e.com/1.jpg"},
        "google_video": full_video(),
    }
    validated = validate_extensions(extensions, PAGE, 1000)
    assert [type(item) for item in validated] == [VideoExtension, ImageExtension]


def test_typed_extensions_are_revalidated(make_config):
    video = validate_video(full_video(), PAGE)
    image = ImageExtension(images=(ImageEntry("https://e.com/1.jpg"),))
    record = validate_record(make_config(), PAGE, extensions={"google_video": video, "google_image": image})
    assert record.video == video
    assert record.image == image


def test_typed_video_with_blank_required_fields():
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video(VideoExtension("", "", ""), PAGE)
    assert str(exc.value) == "Missing required fields: thumbnail_loc, title, description"


def test_typed_video_still_needs_a_location():
    with pytest.raises(MissingRequiredFields, match="content_loc or player_loc"):
        validate_video(VideoExtension("http://e.com/t.jpg", "Title", "Description"), PAGE)


def test_typed_video_limits_are_enforced():
    video = VideoExtension("http://e.com/t.jpg", "Title", "Description", player_loc="http://e.com/p", duration=0)
    with pytest.raises(InvalidExtensionValue):
        validate_video(video, PAGE)
    with pytest.raises(InvalidExtensionValue):
        validate_video(VideoExtension("http://e.com/t.jpg", "Title", "Description", content_loc=(PAGE,)), PAGE)


def test_typed_image_entry_with_blank_loc(make_config):
    with pytest.raises(MissingRequiredFields) as exc:
        validate_image(ImageEntry(""), 1000)
    assert str(exc.value) == "Missing required fields: loc"
    with pytest.raises(MissingRequiredFields, match="Missing required fields: loc"):
        validate_record(make_config(), PAGE, extensions={"google_image": ImageExtension(images=(ImageEntry(""),))})


def test_typed_image_extension_count_is_checked():
    image = ImageExtension(images=tuple(ImageEntry(f"https://e.com/{i}.jpg") for i in range(3)))
    with pytest.raises(TooManyImages, match="got 3"):
        validate_image(image, 2)


@pytest.mark.parametrize("content_loc", [["", " "], ["http://a.example.com/1.mp4", ""], [None]])
def test_video_blank_content_loc_entries_are_rejected(content_loc):
    payload = full_video()
    payload["content_loc"] = content_loc
    del payload["player_loc"]
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video(payload, PAGE)
    assert exc.value.fields == ["content_loc"]


def test_video_blank_content_loc_with_player_loc_is_absent():
    payload = full_video()
    payload["content_loc"] = ""
    video = validate_video(payload, PAGE)
    assert video.content_loc == ()
    assert video.player_loc == "http://www.example.com/videoplayer.php?video=123"


@pytest.mark.parametrize("uploader", ["", "   ", {"value": ""}])
def test_video_blank_uploader_is_rejected(uploader):
    payload = full_video()
    payload["uploader"] = uploader
    with pytest.raises(MissingRequiredFields) as exc:
        validate_video(payload, PAGE)
    assert exc.value.fields == ["uploader.value"]
