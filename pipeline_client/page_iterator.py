# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Iterators for paging through paged API methods.

These iterators simplify the process of paging through API responses
where each response carries a page of results and a link to the next page
(``nextLink``). The link is followed as-is; when it is absent or empty the
listing is complete.

API clients that have methods that follow this pattern return a
:class:`NextLinkIterator`:

    >>> results_iterator = client.list_pipelines()

Or you can walk your way through items and call off the search early if
you find what you're looking for (resulting in possibly fewer requests)::

    >>> for pipeline in results_iterator:
    ...     print(pipeline.name)
    ...     if pipeline.name == 'etl':
    ...         break

At any point, you may check the number of items consumed by referencing the
``num_results`` property of the iterator::

    >>> for my_item in results_iterator:
    ...     if results_iterator.num_results >= 10:
    ...         break

When iterating, not every new item will send a request to the server.
To iterate based on each page of items (where a page corresponds to
a request)::

    >>> for page in results_iterator.pages:
    ...     print('=' * 20)
    ...     print('    Page number: {:d}'.format(results_iterator.page_number))
    ...     print('  Items in page: {:d}'.format(page.num_items))
    ...     print('     First item: {!r}'.format(next(page)))
    ...     print('Items remaining: {:d}'.format(page.remaining))
    ...     print('Next page token: {}'.format(results_iterator.next_page_token))
    ====================
        Page number: 1
      Items in page: 1
         First item: <PipelineResource at 0x7f1d3cccf690>
    Items remaining: 0
    Next page token: https://ws.example.net/pipelines?$skipToken=eav1OzQB0
    ====================
        Page number: 2
      Items in page: 19
         First item: <PipelineResource at 0x7f1d3cccffd0>
    Items remaining: 18
    Next page token: None

An iterator can only be traversed once. To resume a listing later, keep
``next_page_token`` and pass it back as ``page_token``.
"""

import abc
import contextlib
import logging
import threading

_LOGGER = logging.getLogger(__name__)


class Page(object):
    """Single page of results in an iterator.

    Args:
        parent (Iterator): The iterator that owns the current page.
        items (Sequence[Any]): An iterable (that also defines __len__) of items
            from a raw API response.
        item_to_value (Callable[Iterator, Any]):
            Callable to convert an item from the type in the raw API response
            into the native object. Will be called with the iterator and a
            single item.
        raw_page Optional[Any]:
            The raw response the page was built from.
    """

    def __init__(self, parent, items, item_to_value, raw_page=None):
        self._parent = parent
        self._num_items = len(items)
        self._remaining = self._num_items
        self._item_iter = iter(items)
        self._item_to_value = item_to_value
        self._raw_page = raw_page

    @property
    def raw_page(self):
        """Any: The raw response this page was built from."""
        return self._raw_page

    @property
    def num_items(self):
        """int: Total items in the page."""
        return self._num_items

    @property
    def remaining(self):
        """int: Remaining items in the page."""
        return self._remaining

    def __iter__(self):
        """The :class:`Page` is an iterator of items."""
        return self

    def __next__(self):
        """Get the next value in the page."""
        item = next(self._item_iter)
        result = self._item_to_value(self._parent, item)
        # Since we've successfully got the next value from the
        # iterator, we update the number of remaining.
        self._remaining -= 1
        return result


def _item_to_value_identity(iterator, item):
    """An item to value transformer that returns the item un-changed."""
    # pylint: disable=unused-argument
    # We are conforming to the interface defined by Iterator.
    return item


class Iterator(object, metaclass=abc.ABCMeta):
    """A generic class for iterating through API list responses.

    Args:
        item_to_value (Callable[Iterator, Any]): Callable to
            convert an item from the type in the raw API response into the
            native object. Will be called with the iterator and a single
            item.
        page_token (str): A token identifying a page in a result set to start
            fetching results from.
    """

    def __init__(self, item_to_value=_item_to_value_identity, page_token=None):
        self._started = False
        self.__active_iterator = None
        self._advance_lock = threading.Lock()

        self.item_to_value = item_to_value
        """Callable[Iterator, Any]: Callable to convert an item from the type
            in the raw API response into the native object. Will be called with
            the iterator and a single item.
        """

        # The attributes below will change over the life of the iterator.
        self.page_number = 0
        """int: The current page of results."""
        self.next_page_token = page_token
        """str: The token for the next page of results. If this is set before
            the iterator starts, it effectively offsets the iterator to a
            specific starting point."""
        self.num_results = 0
        """int: The total number of results fetched so far."""

    @property
    def pages(self):
        """Iterator of pages in the response.

        returns:
            types.GeneratorType[Page]: A generator of page instances.

        raises:
            ValueError: If the iterator has already been started.
        """
        if self._started:
            raise ValueError("Iterator has already started", self)
        self._started = True
        return self._page_iter(increment=True)

    def by_page(self):
        """Same as :attr:`pages`."""
        return self.pages

    def _items_iter(self):
        """Iterator for each item returned."""
        for page in self._page_iter(increment=False):
            for item in page:
                self.num_results += 1
                yield item

    def __iter__(self):
        """Iterator for each item returned.

        Returns:
            types.GeneratorType[Any]: A generator of items from the API.

        Raises:
            ValueError: If the iterator has already been started.
        """
        if self._started:
            raise ValueError("Iterator has already started", self)
        self._started = True
        return self._items_iter()

    def __next__(self):
        if self.__active_iterator is None:
            self.__active_iterator = iter(self)
        return next(self.__active_iterator)

    def _page_iter(self, increment):
        """Generator of pages of API responses.

        Args:
            increment (bool): Flag indicating if the total number of results
                should be incremented on each page. This is useful since a page
                iterator will want to increment by results per page while an
                items iterator will want to increment per item.

        Yields:
            Page: each page of items from the API.
        """
        page = self._advance()
        while page is not None:
            self.page_number += 1
            if increment:
                self.num_results += page.num_items
            yield page
            page = self._advance()

    @contextlib.contextmanager
    def _single_flight(self):
        if not self._advance_lock.acquire(blocking=False):
            raise RuntimeError("Iterator is already fetching a page", self)
        try:
            yield
        finally:
            self._advance_lock.release()

    def _advance(self):
        with self._single_flight():
            return self._next_page()

    @abc.abstractmethod
    def _next_page(self):
        """Get the next page in the iterator.

        This does nothing and is intended to be over-ridden by subclasses
        to return the next :class:`Page`.

        Raises:
            NotImplementedError: Always, this method is abstract.
        """
        raise NotImplementedError


class NextLinkIterator(Iterator):
    """Iterate a listing whose responses link to the next page.

    Args:
        fetch_next (Callable[[str], pipeline_client.dispatcher.OperationResponse]):
            Fetches the page a next link points to.
        first_response (Optional[pipeline_client.dispatcher.OperationResponse]):
            The already fetched first page. Omit it to start from
            ``page_token``.
        item_to_value (Callable[Iterator, Any]): Callable to convert an item
            into the native object.
        page_token (Optional[str]): A next link to resume from.
        items_field (str): Attribute of the page body holding the items.
        next_link_field (str): Attribute of the page body holding the link
            to the next page.

    Raises:
        ValueError: If both ``first_response`` and ``page_token`` are given.

    .. autoattribute:: pages
    """

    _DEFAULT_ITEMS_FIELD = "value"
    _DEFAULT_NEXT_LINK_FIELD = "next_link"

    def __init__(
        self,
        fetch_next,
        first_response=None,
        item_to_value=_item_to_value_identity,
        page_token=None,
        items_field=_DEFAULT_ITEMS_FIELD,
        next_link_field=_DEFAULT_NEXT_LINK_FIELD,
    ):
        if first_response is not None and page_token:
            raise ValueError("Pass either first_response or page_token, not both")
        super(NextLinkIterator, self).__init__(
            item_to_value=item_to_value, page_token=page_token
        )
        self._fetch_next = fetch_next
        self._first_response = first_response
        self._items_field = items_field
        self._next_link_field = next_link_field

    def _next_page(self):
        """Get the next page in the iterator.

        Returns:
            Optional[Page]: The next page in the iterator or :data:`None` if
                there are no pages left.
        """
        if self._first_response is not None:
            response, self._first_response = self._first_response, None
        elif self.next_page_token:
            _LOGGER.debug("Fetching page %d", self.page_number + 1)
            response = self._fetch_next(self.next_page_token)
        else:
            return None
        return self._page_from_response(response)

    def _page_from_response(self, response):
        body = response.body
        items = getattr(body, self._items_field) if body is not None else []
        page = Page(self, items, self.item_to_value, raw_page=response)
        next_link = getattr(body, self._next_link_field) if body is not None else None
        self.next_page_token = next_link or None
        return page
