"""Mock MusicBrainz API responses for testing."""

MUSICBRAINZ_RELEASE_SEARCH_RESPONSE = {
    "created": "2024-01-10T12:00:00.000Z",
    "count": 1,
    "offset": 0,
    "releases": [
        {
            "id": "b84ee12a-09ef-421b-82de-0441a926375b",
            "score": 100,
            "title": "OK Computer",
            "barcode": "724385522925",
        }
    ],
}

MUSICBRAINZ_RELEASE_SEARCH_EMPTY_RESPONSE = {
    "created": "2024-01-10T12:00:00.000Z",
    "count": 0,
    "offset": 0,
    "releases": [],
}

MUSICBRAINZ_RELEASE_RESPONSE = {
    "id": "b84ee12a-09ef-421b-82de-0441a926375b",
    "title": "OK Computer",
    "date": "1997-06-16",
    "barcode": "724385522925",
    "artist-credit": [{"name": "Radiohead", "artist": {"name": "Radiohead"}}],
    "label-info": [{"catalog-number": "NODATA 02", "label": {"name": "Parlophone"}}],
    "tags": [
        {"name": "alternative rock", "count": 12},
        {"name": "art rock", "count": 7},
        {"name": "rock", "count": 9},
        {"name": "experimental", "count": 2},
        {"name": "british", "count": 4},
        {"name": "90s", "count": 1},
    ],
    "media": [
        {
            "format": "CD",
            "position": 1,
            "track-count": 2,
            "tracks": [
                {"position": 1, "number": "1", "title": "Airbag", "length": 284000},
                {"position": 2, "number": "2", "title": "Paranoid Android", "length": 383000},
            ],
        }
    ],
    "cover-art-archive": {"front": True, "count": 3},
}

MUSICBRAINZ_RELEASE_NO_COVER_RESPONSE = {
    "id": "0c1f4d2d-0000-4000-8000-000000000000",
    "title": "Untitled Demo",
    "date": "",
    "artist-credit": [],
    "label-info": [],
    "tags": [],
    "media": [],
    "cover-art-archive": {"front": False, "count": 0},
}
