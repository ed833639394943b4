import asyncio
import gzip
import zlib

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response


COMPRESSED_TEXT = b"The quick brown fox jumps over the lazy dog. " * 20

app = FastAPI()


async def _echo(prefix: str, request: Request) -> PlainTextResponse:
    content = (await request.body()).decode()
    return PlainTextResponse(f"{prefix}: {content}")


@app.get("/a")
async def get_a(request: Request):
    return await _echo("j", request)


@app.get("/slow_a")
async def get_slow_a(request: Request):
    await asyncio.sleep(2)
    return await _echo("j", request)


@app.get("/header_pong")
async def header_pong(request: Request):
    return PlainTextResponse(request.headers.get("Ping", "No header!"))


@app.head("/b")
async def head_b():
    return Response(status_code=418)


@app.post("/c")
async def post_c(request: Request):
    return await _echo("l", request)


@app.put("/d")
async def put_d(request: Request):
    return await _echo("m", request)


@app.delete("/e")
async def delete_e(request: Request):
    return await _echo("n", request)


@app.api_route("/f", methods=["TRACE"])
async def trace_f(request: Request):
    return await _echo("o", request)


@app.options("/g")
async def options_g(request: Request):
    return await _echo("p", request)


@app.patch("/i")
async def patch_i(request: Request):
    return await _echo("r", request)


@app.get("/redirect")
async def redirect():
    return RedirectResponse("/a", status_code=302)


@app.get("/redirect_absolute")
async def redirect_absolute(request: Request):
    return RedirectResponse(f"{request.base_url}a", status_code=301)


@app.get("/loop")
async def loop():
    return RedirectResponse("/loop", status_code=307)


@app.get("/no_location")
async def no_location():
    return Response(status_code=302)


@app.get("/gzip")
async def gzipped():
    return Response(gzip.compress(COMPRESSED_TEXT), headers={"Content-Encoding": "gzip"})


@app.get("/deflate")
async def deflated():
    return Response(zlib.compress(COMPRESSED_TEXT), headers={"Content-Encoding": "deflate"})
