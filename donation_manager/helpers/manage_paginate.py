"""Module to handle pagination requests."""
from math import ceil


def paginate_query( query, page_number, rows_per_page ):
    """Take a SQLAlchemy query and paginate it.

    Asking for a page past the last one is not an error: the page is returned with no items.

    :param query: A Flask-SQLAlchemy query.
    :param int page_number: The 1-indexed page.
    :param int rows_per_page: The page size.
    :return: A Flask-SQLAlchemy Pagination object.
    """

    return query.paginate( page=page_number, per_page=rows_per_page, error_out=False, count=True )


def transform_data( page, schema_name ):
    """Transform a paginate() object to the listing payload.

    :param page: A paginate() object.
    :param schema_name: The schema to apply the results to.
    :return: { 'items': [ ... ], 'pagination': { ... } }
    """

    total_items = page.total or 0
    return {
        'items': schema_name( many=True ).dump( page.items ),
        'pagination': {
            'currentPage': page.page,
            'totalPages': ceil( total_items / page.per_page ) if page.per_page else 0,
            'totalItems': total_items,
            'itemsPerPage': page.per_page
        }
    }
