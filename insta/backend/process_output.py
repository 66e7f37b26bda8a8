import asyncio
import sys

TERMINATE_TIMEOUT_S = 10


async def terminate_process(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(process.wait(), TERMINATE_TIMEOUT_S)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()


async def process_output_till_done(process: asyncio.subprocess.Process, verbose) -> tuple[bytes, bytes]:
    stdout_lines = []
    stderr_lines = []

    async def read_stream(stream, callback, output_list):
        while True:
            line = await stream.readline()
            if line:
                if verbose:
                    callback(line)
                output_list.append(line)
            else:
                break

    tasks = [
        read_stream(process.stdout, lambda line: sys.stdout.buffer.write(b' > ' + line), stdout_lines),
        read_stream(process.stderr, lambda line: sys.stderr.buffer.write(b' > ' + line), stderr_lines)
    ]

    try:
        await asyncio.gather(*tasks)
        await process.wait()
    except asyncio.CancelledError:
        await terminate_process(process)
        raise

    sys.stdout.flush()
    sys.stderr.flush()

    return b''.join(stdout_lines), b''.join(stderr_lines)
