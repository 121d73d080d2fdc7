"""
SampleWeb Backend - Sample Controller Tests
===========================================

What:  Handler-level tests (HandlerMethod.invoke with a hand-built request)
       and endpoint tests through the FastAPI app with HTTPX.

What we test:
    ✅ doE default name / required price scenario
    ✅ doG record binding with named + default-named model entries
    ✅ doD GET echo and POST manual parsing
    ✅ doB void return renders the path-named view
    ✅ redirect bypasses rendering
    ✅ error responses for each failure type
    ✅ access log names the handler and its resolved view
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from sampleweb.exceptions import MissingRequiredParameterError, TypeCoercionError
from sampleweb.main import register_exception_handlers
from sampleweb.models.product import Product
from sampleweb.routes.controller import Controller
from sampleweb.routes.sample import controller
from sampleweb.schemas.view import RedirectInstruction, RenderInstruction
from sampleweb.services.view_resolver import ViewResolver


def handler_for(path, method):
    handler = controller.find_handler(path, method)
    assert handler is not None, f"no handler for {method} {path}"
    return handler


class TestHandlerInvocation:
    """Bind → invoke → resolve without HTTP."""

    @pytest.mark.asyncio
    async def test_doE_uses_default_name(self, make_request, resolver):
        req = make_request(method="POST", path="doE", price="5000")

        instruction = await handler_for("doE", "POST").invoke(req, resolver)

        assert isinstance(instruction, RenderInstruction)
        assert instruction.view_name == "result"
        assert instruction.context == {"name": "RADIO", "price": 5000}

    @pytest.mark.asyncio
    async def test_doE_without_price_fails(self, make_request, resolver):
        with pytest.raises(MissingRequiredParameterError):
            await handler_for("doE", "POST").invoke(
                make_request(method="POST", name="TV"), resolver
            )

    @pytest.mark.asyncio
    async def test_doG_binds_product_record(self, make_request, resolver):
        req = make_request(method="POST", path="doG", name="Pen", price="1200")

        instruction = await handler_for("doG", "POST").invoke(req, resolver)

        assert instruction.view_name == "product"
        product = instruction.context["product"]
        assert isinstance(product, Product)
        assert (product.id, product.name, product.price) == (0, "Pen", 1200)
        assert instruction.context["productVO"] is product

    @pytest.mark.asyncio
    async def test_doD_get_echoes_msg(self, make_request, resolver):
        req = make_request(path="doD", msg="hello")

        instruction = await handler_for("doD", "GET").invoke(req, resolver)

        assert instruction.view_name == "result"
        assert instruction.context["msg"] == "hello"
        assert req.get_attribute("msg") == "hello"

    @pytest.mark.asyncio
    async def test_doD_post_parses_price(self, make_request, resolver):
        req = make_request(method="POST", path="doD", name="Pen", price="1000")

        instruction = await handler_for("doD", "POST").invoke(req, resolver)

        assert instruction.context == {"name": "Pen", "price": 1000}

    @pytest.mark.asyncio
    async def test_doD_post_bad_price(self, make_request, resolver):
        with pytest.raises(TypeCoercionError):
            await handler_for("doD", "POST").invoke(
                make_request(method="POST", name="Pen", price="cheap"), resolver
            )

    @pytest.mark.asyncio
    async def test_doC_merges_attribute_and_model(self, make_request, resolver):
        instruction = await handler_for("doC", "GET").invoke(make_request(path="doC"), resolver)
        assert instruction.context == {
            "message": "doC request attribute",
            "msg": "doC model attribute",
        }

    @pytest.mark.asyncio
    async def test_doF_builds_product(self, make_request, resolver):
        req = make_request(method="POST", name="Cup", price="300")

        instruction = await handler_for("doF", "POST").invoke(req, resolver)

        assert instruction.context["product"] == Product(1, "Cup", 300)

    @pytest.mark.asyncio
    async def test_doB_renders_path_named_view(self, make_request, resolver):
        instruction = await handler_for("doB", "GET").invoke(make_request(path="doB"), resolver)
        assert instruction.template_path == "views/doB.html"

    @pytest.mark.asyncio
    async def test_redirect_handler(self, make_request):
        class ExplodingTemplates:
            def get_template(self, name):
                raise AssertionError("redirect must not look up templates")

        resolver = ViewResolver(prefix="views/", suffix=".html", templates=ExplodingTemplates())
        instruction = await handler_for("redirect", "GET").invoke(make_request(), resolver)

        assert isinstance(instruction, RedirectInstruction)
        assert instruction.location == "/main.home"


class TestControllerRegistration:
    """Method restrictions and async handlers."""

    def test_doA_accepts_any_method(self):
        assert controller.find_handler("doA", "GET") is not None
        assert controller.find_handler("doA", "POST") is not None

    def test_doB_is_get_only(self):
        assert controller.find_handler("doB", "POST") is None

    def test_doD_has_separate_get_and_post_handlers(self):
        assert handler_for("doD", "GET").func is not handler_for("doD", "POST").func

    @pytest.mark.asyncio
    async def test_async_handler_is_awaited(self, make_request, resolver):
        local = Controller(resolver=resolver)

        @local.get_mapping("doA")
        async def async_handler():
            return "doA"

        instruction = await local.find_handler("doA", "GET").invoke(make_request(), resolver)
        assert instruction.view_name == "doA"


class TestEndpoints:
    """Full request/response cycle through the FastAPI app."""

    @pytest.mark.asyncio
    async def test_doA_get_and_post(self, test_client):
        for method in ("GET", "POST"):
            response = await test_client.request(method, "/doA")
            assert response.status_code == 200
            assert "<h1>doA</h1>" in response.text

    @pytest.mark.asyncio
    async def test_doB_post_not_allowed(self, test_client):
        response = await test_client.post("/doB")
        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_doB_renders(self, test_client):
        response = await test_client.get("/doB")
        assert response.status_code == 200
        assert "<h1>doB</h1>" in response.text

    @pytest.mark.asyncio
    async def test_doC_renders_attribute_and_model(self, test_client):
        response = await test_client.get("/doC")
        assert "doC request attribute" in response.text
        assert "doC model attribute" in response.text

    @pytest.mark.asyncio
    async def test_doD_get_query_string(self, test_client):
        response = await test_client.get("/doD", params={"msg": "hello"})
        assert response.status_code == 200
        assert '<dd id="msg">hello</dd>' in response.text

    @pytest.mark.asyncio
    async def test_doE_form_post(self, test_client):
        response = await test_client.post("/doE", data={"price": "5000"})
        assert response.status_code == 200
        assert '<dd id="name">RADIO</dd>' in response.text
        assert '<dd id="price">5000</dd>' in response.text

    @pytest.mark.asyncio
    async def test_doE_missing_price(self, test_client):
        response = await test_client.post("/doE", data={"name": "TV"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "missing_parameter"
        assert body["details"]["parameter"] == "price"

    @pytest.mark.asyncio
    async def test_doE_non_numeric_price(self, test_client):
        response = await test_client.post("/doE", data={"price": "cheap"})
        assert response.status_code == 400
        assert response.json()["error"] == "type_mismatch"

    @pytest.mark.asyncio
    async def test_query_parameters_bind_on_post(self, test_client):
        response = await test_client.post("/doE?price=42")
        assert '<dd id="price">42</dd>' in response.text

    @pytest.mark.asyncio
    async def test_doF_renders_product(self, test_client):
        response = await test_client.post("/doF", data={"name": "Cup", "price": "300"})
        assert response.status_code == 200
        assert "<td>Cup</td>" in response.text
        assert "<td>300</td>" in response.text

    @pytest.mark.asyncio
    async def test_doG_renders_both_entries(self, test_client):
        response = await test_client.post("/doG", data={"name": "Pen", "price": "1200"})
        assert response.status_code == 200
        assert "<td>Pen</td>" in response.text
        assert 'id="productVO"' in response.text

    @pytest.mark.asyncio
    async def test_doG_bad_price_is_not_an_error(self, test_client):
        response = await test_client.post("/doG", data={"name": "Pen", "price": "cheap"})
        assert response.status_code == 200
        assert "<td>0</td>" in response.text

    @pytest.mark.asyncio
    async def test_redirect(self, test_client):
        response = await test_client.get("/redirect")
        assert response.status_code == 302
        assert response.headers["location"] == "/main.home"

    @pytest.mark.asyncio
    async def test_home(self, test_client):
        response = await test_client.get("/main.home")
        assert response.status_code == 200
        assert 'action="/doE"' in response.text

    @pytest.mark.asyncio
    async def test_rendered_values_are_escaped(self, test_client):
        response = await test_client.get("/doD", params={"msg": "<b>x</b>"})
        assert "&lt;b&gt;x&lt;/b&gt;" in response.text

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/doA", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_missing_template_is_404(self, resolver):
        app = FastAPI()
        register_exception_handlers(app)
        local = Controller(resolver=resolver)

        @local.get_mapping("ghost")
        def ghost():
            return "ghost"

        app.include_router(local.router)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ghost")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "template_not_found"
        assert body["details"]["template_path"] == "views/ghost.html"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["templates"] == "available"

    @pytest.mark.asyncio
    async def test_form_content_type_is_case_insensitive(self, test_client):
        response = await test_client.post(
            "/doE",
            content=b"price=7",
            headers={"Content-Type": "Application/X-WWW-Form-Urlencoded; Charset=UTF-8"},
        )
        assert response.status_code == 200
        assert '<dd id="price">7</dd>' in response.text

    @pytest.mark.asyncio
    async def test_absent_values_render_empty(self, test_client):
        response = await test_client.get("/doD")
        assert '<dd id="msg"></dd>' in response.text
        assert "None" not in response.text

        response = await test_client.post("/doD", data={"price": "5"})
        assert '<dd id="name"></dd>' in response.text
        assert '<dd id="price">5</dd>' in response.text

    @pytest.mark.asyncio
    async def test_unsafe_request_id_is_replaced(self, test_client):
        response = await test_client.get("/doA", headers={"X-Request-ID": "bad id!"})
        rid = response.headers["X-Request-ID"]
        assert rid != "bad id!"
        assert len(rid) == 8


class TestErrorBodies:
    """JSON error bodies built from ErrorResponse."""

    @pytest.mark.asyncio
    async def test_binding_error_carries_details_and_request_id(self, test_client):
        response = await test_client.post(
            "/doE", data={"name": "TV"}, headers={"X-Request-ID": "req-42"}
        )
        body = response.json()
        assert body["request_id"] == "req-42"
        assert body["message"] == "Required int parameter 'price' is not present"
        assert body["details"] == {"parameter": "price", "expected_type": "int"}

    @pytest.mark.asyncio
    async def test_view_resolution_error_hides_details(self, resolver):
        app = FastAPI()
        register_exception_handlers(app)
        local = Controller(resolver=resolver)

        @local.get_mapping("silent")
        def silent():
            return None

        app.include_router(local.router)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/silent")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "view_resolution_error"
        assert "details" not in body


class TestAccessLog:
    """The access line names the handler and what its result resolved to."""

    @staticmethod
    def access_records(caplog):
        return [r for r in caplog.records if r.name == "sampleweb.access"]

    @pytest.mark.asyncio
    async def test_render_logs_handler_and_view(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="sampleweb.access")

        await test_client.get("/doA")

        (record,) = self.access_records(caplog)
        assert record.handler == "do_a"
        assert record.outcome == "view=doA"
        assert record.levelno == logging.INFO

    @pytest.mark.asyncio
    async def test_redirect_logs_target(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="sampleweb.access")

        await test_client.get("/redirect")

        (record,) = self.access_records(caplog)
        assert record.handler == "redirect"
        assert record.outcome == "-> /main.home"

    @pytest.mark.asyncio
    async def test_binding_failure_logs_handler_at_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="sampleweb.access")

        await test_client.post("/doE", data={"name": "TV"})

        (record,) = self.access_records(caplog)
        assert record.handler == "do_e"
        assert record.outcome == "-"
        assert record.levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_unrouted_and_health_requests(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="sampleweb.access")

        await test_client.get("/nowhere")
        await test_client.get("/health")

        (record,) = self.access_records(caplog)
        assert record.getMessage().startswith("GET /nowhere 404 - -")

    @pytest.mark.asyncio
    async def test_doC_logs_its_call(self, make_request, resolver, caplog):
        caplog.set_level(logging.INFO, logger="sampleweb.routes.sample")

        await handler_for("doC", "GET").invoke(make_request(path="doC"), resolver)

        assert any("doC() called" in r.getMessage() for r in caplog.records)
