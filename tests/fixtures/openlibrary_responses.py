"""Mock OpenLibrary Read API responses for testing."""

OPENLIBRARY_BRIEF_RESPONSE = {
    "records": {
        "/books/OL7353617M": {
            "isbns": ["0441172717", "9780441172719"],
            "olids": ["OL7353617M"],
            "publishDates": ["1990"],
            "data": {
                "title": "Dune",
                "subtitle": "Deluxe Edition",
                "authors": [{"url": "https://openlibrary.org/authors/OL79034A", "name": "Frank Herbert"}],
                "number_of_pages": 535,
                "publishers": [{"name": "Ace Books"}],
                "publish_date": "September 1, 1990",
                "subjects": [
                    {"name": "Science fiction", "url": "https://openlibrary.org/subjects/science_fiction"},
                    {"name": "Dune (Imaginary place)", "url": "https://openlibrary.org/subjects/place:dune"},
                ],
            },
            "details": {
                "bib_key": "isbn:9780441172719",
                "details": {
                    "covers": [8231856, 240726],
                    "physical_format": "mass market paperback",
                },
            },
        }
    },
    "items": [],
}

OPENLIBRARY_BRIEF_NO_DATE_RESPONSE = {
    "records": {
        "/books/OL1M": {
            "publishDates": ["1965"],
            "data": {"title": "Dune"},
            "details": {"details": {}},
        }
    },
    "items": [],
}

OPENLIBRARY_EMPTY_RESPONSE: list = []
