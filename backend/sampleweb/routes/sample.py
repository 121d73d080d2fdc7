"""
SampleWeb Backend - Sample Controller Routes
============================================

What:  The sample handlers showing each way a handler can receive request
       data and hand data to its view.

Route Inventory:
    /doA        GET, POST  logical name "doA"
    /doB        GET        no return value, view named after the path
    /doC        GET        request attribute + model attribute → "result"
    /doD        GET        reads `msg` by hand → "result"
    /doD        POST       reads `name` / `price` by hand → "result"
    /doE        POST       declared `name` (default RADIO) and `price` → "result"
    /doF        POST       declared `name` / `price`, builds a Product → "product"
    /doG        POST       binds a whole Product record → ModelAndView "product"
    /redirect   GET        "redirect:" to the home page
    /main.home  GET        home page linking every sample
"""

import logging

from sampleweb.config import settings
from sampleweb.exceptions import MissingRequiredParameterError
from sampleweb.models.product import PRODUCT_SHAPE, Product
from sampleweb.routes.controller import Controller
from sampleweb.schemas.view import Model, ModelAndView
from sampleweb.services.binder import (
    coerce_value,
    model_arg,
    record_param,
    request_arg,
    request_param,
)
from sampleweb.services.request_context import WebRequest

logger = logging.getLogger(__name__)

controller = Controller(tags=["Sample"])
router = controller.router


@controller.request_mapping("doA")
def do_a() -> str:
    """No method restriction: GET and POST both land here."""
    logger.info("doA() called")
    return "doA"


@controller.get_mapping("doB", view_from_path=True)
def do_b() -> None:
    """Returns nothing; the route renders views/doB.html."""
    logger.info("doB() called")


@controller.get_mapping("doC", params=[request_arg("request"), model_arg("model")])
def do_c(request: WebRequest, model: Model) -> str:
    logger.info("doC() called: setting request attribute and model attribute")
    request.set_attribute("message", "doC request attribute")
    model.add_attribute("msg", "doC model attribute")
    return "result"


# <a href="doD?msg=hello">doD</a>
@controller.get_mapping("doD", params=[request_arg("request")])
def do_d(request: WebRequest) -> str:
    msg = request.get_parameter("msg")
    logger.info("doD GET called: msg=%s", msg)
    request.set_attribute("msg", msg)
    return "result"


@controller.post_mapping("doD", params=[request_arg("request")])
def do_d_post(request: WebRequest) -> str:
    name = request.get_parameter("name")
    raw_price = request.get_parameter("price")
    if raw_price is None:
        raise MissingRequiredParameterError(parameter="price", expected_type="int")
    price = coerce_value(raw_price, int, "price")

    logger.info("doD POST called: name=%s, price=%d", name, price)
    request.set_attribute("name", name)
    request.set_attribute("price", price)
    return "result"


@controller.post_mapping(
    "doE",
    params=[
        request_param("product_name", name="name", default="RADIO"),
        request_param("product_price", int, name="price"),
        model_arg("model"),
    ],
)
def do_e(product_name: str, product_price: int, model: Model) -> str:
    logger.info("doE called: name=%s, price=%d", product_name, product_price)
    model.add_attribute("name", product_name)
    model.add_attribute("price", product_price)
    return "result"


@controller.post_mapping(
    "doF",
    params=[
        request_param("name", required=False),
        request_param("price", int),
        model_arg("model"),
    ],
)
def do_f(name: str, price: int, model: Model) -> str:
    logger.info("doF called: name=%s, price=%d", name, price)
    product = Product(1, name, price)
    model.add_attribute("product", product)
    return "product"


@controller.post_mapping("doG", params=[record_param("product", PRODUCT_SHAPE)])
def do_g(product: Product) -> ModelAndView:
    """
    The Product arrives already built from matching parameters.

    It is added twice: once under its default name ("productVO") and once
    as "product"; both entries are the same instance.
    """
    logger.info("doG called: product=%s", product)
    mav = ModelAndView()
    mav.add_object(product)
    mav.add_object(product, name="product")
    mav.set_view_name("product")
    return mav


@controller.get_mapping("redirect")
def redirect() -> str:
    logger.info("redirect requested")
    return f"redirect:{settings.home_path}"


@controller.get_mapping("main.home")
def home() -> str:
    return "home"
