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

"""AsyncIO iterators for paging through paged API methods.

API clients that have methods that follow the next-link pagination pattern
return an :class:`AsyncNextLinkIterator`:

    >>> results_iterator = await client.list_pipelines()

    >>> async for pipeline in results_iterator:
    ...     print(pipeline.name)

To iterate based on each page of items (where a page corresponds to
a request)::

    >>> async for page in results_iterator.pages:
    ...     print('  Items in page: {:d}'.format(page.num_items))
    ...     print('Next page token: {}'.format(results_iterator.next_page_token))
"""

import abc
import logging

from pipeline_client.page_iterator import Page, _item_to_value_identity

_LOGGER = logging.getLogger(__name__)


class AsyncIterator(abc.ABC):
    """A generic class for iterating through API list responses.

    Args:
        item_to_value (Callable[AsyncIterator, Any]):
            Callable to convert an item from the type in the raw API response
            into the native object. Will be called with the iterator and a
            single item.
        page_token (str): A token identifying a page in a result set to start
            fetching results from.
    """

    def __init__(self, item_to_value=_item_to_value_identity, page_token=None):
        self._started = False
        self._advancing = False
        self.__active_aiterator = None

        self.item_to_value = item_to_value
        """Callable[Iterator, Any]: Callable to convert an item from the type
            in the raw API response into the native object. Will be called with
            the iterator and a
            single item.
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
            types.AsyncGeneratorType[pipeline_client.page_iterator.Page]: A
                generator of page instances.

        raises:
            ValueError: If the iterator has already been started.
        """
        if self._started:
            raise ValueError("Iterator has already started", self)
        self._started = True
        return self._page_aiter(increment=True)

    def by_page(self):
        """Same as :attr:`pages`."""
        return self.pages

    async def _items_aiter(self):
        """Iterator for each item returned."""
        async for page in self._page_aiter(increment=False):
            for item in page:
                self.num_results += 1
                yield item

    def __aiter__(self):
        """Iterator for each item returned.

        Returns:
            types.AsyncGeneratorType[Any]: A generator of items from the API.

        Raises:
            ValueError: If the iterator has already been started.
        """
        if self._started:
            raise ValueError("Iterator has already started", self)
        self._started = True
        return self._items_aiter()

    async def __anext__(self):
        if self.__active_aiterator is None:
            self.__active_aiterator = self.__aiter__()
        return await self.__active_aiterator.__anext__()

    async def _page_aiter(self, increment):
        """Generator of pages of API responses.

        Args:
            increment (bool): Flag indicating if the total number of results
                should be incremented on each page.

        Yields:
            Page: each page of items from the API.
        """
        page = await self._advance()
        while page is not None:
            self.page_number += 1
            if increment:
                self.num_results += page.num_items
            yield page
            page = await self._advance()

    async def _advance(self):
        if self._advancing:
            raise RuntimeError("Iterator is already fetching a page", self)
        self._advancing = True
        try:
            return await self._next_page()
        finally:
            self._advancing = False

    @abc.abstractmethod
    async def _next_page(self):
        """Get the next page in the iterator.

        This does nothing and is intended to be over-ridden by subclasses
        to return the next :class:`Page`.

        Raises:
            NotImplementedError: Always, this method is abstract.
        """
        raise NotImplementedError


class AsyncNextLinkIterator(AsyncIterator):
    """Iterate a next-link listing from a coroutine.

    Args:
        fetch_next (Callable[[str], Awaitable[OperationResponse]]): Coroutine
            function fetching the page a next link points to.
        first_response (Optional[pipeline_client.dispatcher.OperationResponse]):
            The already fetched first page.
        item_to_value (Callable[AsyncIterator, Any]): Item converter.
        page_token (Optional[str]): A next link to resume from.
        items_field (str): Attribute of the page body holding the items.
        next_link_field (str): Attribute of the page body holding the next link.

    Raises:
        ValueError: If both ``first_response`` and ``page_token`` are given.
    """

    def __init__(
        self,
        fetch_next,
        first_response=None,
        item_to_value=_item_to_value_identity,
        page_token=None,
        items_field="value",
        next_link_field="next_link",
    ):
        if first_response is not None and page_token:
            raise ValueError("Pass either first_response or page_token, not both")
        super().__init__(item_to_value=item_to_value, page_token=page_token)
        self._fetch_next = fetch_next
        self._first_response = first_response
        self._items_field = items_field
        self._next_link_field = next_link_field

    async def _next_page(self):
        """Get the next page in the iterator.

        Returns:
            Optional[Page]: The next page in the iterator or :data:`None` if
                there are no pages left.
        """
        if self._first_response is not None:
            response, self._first_response = self._first_response, None
        elif self.next_page_token:
            _LOGGER.debug("Fetching page %d", self.page_number + 1)
            response = await self._fetch_next(self.next_page_token)
        else:
            return None

        body = response.body
        items = getattr(body, self._items_field) if body is not None else []
        page = Page(self, items, self.item_to_value, raw_page=response)
        next_link = getattr(body, self._next_link_field) if body is not None else None
        self.next_page_token = next_link or None
        return page
