"""Fixtures de pytest: páginas sintéticas del portal PITC servidas con httpx.MockTransport."""

from typing import Callable, List
from urllib.parse import parse_qs

import httpx
import pytest

from scraper.orchestrator import BillLookupOrchestrator
from scraper.pitc import PITCBillScraper

SESSION_COOKIES = [
    "ASP.NET_SessionId=abc123; path=/; HttpOnly; SameSite=Lax",
    "__RequestVerificationToken_L2xlc2NvYmlsbA2=cookie-rvt; path=/; HttpOnly",
]


def token_page(
    view_state: str = "VS-TOKEN",
    generator: str = "GEN-TOKEN",
    event_validation: str = "EV-TOKEN",
    verification: str = "RVT-TOKEN",
) -> str:
    """Página inicial con los campos ocultos de ASP.NET WebForms."""
    fields = []
    if view_state is not None:
        fields.append(f'<input type="hidden" name="__VIEWSTATE" id="__VIEWSTATE" value="{view_state}" />')
    if generator is not None:
        fields.append(
            f'<input type="hidden" name="__VIEWSTATEGENERATOR" id="__VIEWSTATEGENERATOR" value="{generator}" />'
        )
    if event_validation is not None:
        fields.append(
            f'<input type="hidden" name="__EVENTVALIDATION" id="__EVENTVALIDATION" value="{event_validation}" />'
        )
    if verification is not None:
        fields.append(f'<input name="__RequestVerificationToken" type="hidden" value="{verification}" />')

    return f"""
    <html><body>
      <form method="post" action="./lescobill" id="form1">
        {''.join(fields)}
        <input type="radio" name="rbSearchByList" value="refno" checked />
        <input type="text" name="searchTextBox" />
        <input type="text" name="ruCodeTextBox" />
        <input type="submit" name="btnSearch" value="Search" />
        <div id="ua"></div>
      </form>
    </body></html>
    """


BILL_PAGE = """
<html><body>
  <div id="ua">   </div>
  <table>
    <tr><th>Field</th><th>Value</th></tr>
    <tr><td>Consumer Name</td><td> Jane Doe </td></tr>
    <tr><td>Address</td><td>House 12, Street 4, Lahore</td></tr>
    <tr><td>Tariff</td><td>A-1a(01)</td></tr>
    <tr><td>Bill Month Issue Date</td><td>05-Jan-25</td></tr>
    <tr><td>Reading Date</td><td>02-Jan-25</td></tr>
    <tr><td>Present Reading Details</td><td>not mapped</td></tr>
    <tr><td>Current Reading</td><td>4521</td></tr>
    <tr><td>Previous Reading</td><td>4300</td></tr>
    <tr><td>Units Consumed</td><td>221</td></tr>
    <tr><td>Electricity Charges</td><td>3,900</td></tr>
    <tr><td>GST</td><td>650</td></tr>
    <tr><td>Total Amount Payable</td><td>5000</td></tr>
    <tr><td>Meter Status</td><td>OK</td></tr>
    <tr><td>Only one cell</td></tr>
  </table>
  <span class="bill-amount"> Rs. 5,000 </span>
</body></html>
"""

ERROR_PAGE = """
<html><body>
  <div id="ua">
     Reference number does not belong to LESCO
  </div>
  <table><tr><td>Consumer Name</td><td>Should Not Parse</td></tr></table>
</body></html>
"""


class FakePortal:
    """Portal PITC simulado: GET devuelve tokens, POST devuelve la factura."""

    def __init__(self, get_html: str = None, post_html: str = BILL_PAGE, cookies: List[str] = None):
        self.get_html = token_page() if get_html is None else get_html
        self.post_html = post_html
        self.cookies = SESSION_COOKIES if cookies is None else cookies
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            headers = [("set-cookie", cookie) for cookie in self.cookies]
            return httpx.Response(200, text=self.get_html, headers=headers)
        return httpx.Response(200, text=self.post_html)

    @property
    def posts(self) -> List[httpx.Request]:
        return [request for request in self.requests if request.method == "POST"]

    def form_of(self, request: httpx.Request) -> dict:
        return parse_qs(request.content.decode(), keep_blank_values=True)


@pytest.fixture
def portal() -> FakePortal:
    return FakePortal()


@pytest.fixture
def make_scraper() -> Callable[[Callable], PITCBillScraper]:
    """Construye un PITCBillScraper contra un handler de httpx.MockTransport."""
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> PITCBillScraper:
        return PITCBillScraper(transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def orchestrator(portal, make_scraper) -> BillLookupOrchestrator:
    return BillLookupOrchestrator(scraper=make_scraper(portal))
