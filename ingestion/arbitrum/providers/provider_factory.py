# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified by: Dang Tien Cuong, 2025
# Change Description: Async HTTP only. No failover, every call is made once.

from urllib.parse import urlparse

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.providers.async_base import AsyncBaseProvider

from utils.exceptions import ConfigurationError

DEFAULT_TIMEOUT = 60


def get_async_provider_from_uri(uri_string: str, timeout: int = DEFAULT_TIMEOUT) -> AsyncBaseProvider:
    uri = urlparse(uri_string)

    if uri.scheme == "http" or uri.scheme == "https":
        request_kwargs = {"timeout": timeout}
        return AsyncHTTPProvider(uri_string, request_kwargs=request_kwargs)
    else:
        raise ConfigurationError(f"Unknown uri scheme {uri_string}. Supported: http, https")


def get_async_web3(uri_string: str, timeout: int = DEFAULT_TIMEOUT) -> AsyncWeb3:
    return AsyncWeb3(get_async_provider_from_uri(uri_string, timeout))
