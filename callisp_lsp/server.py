"""
A minimal pygls-based Language Server for callisp.

Features:
- Text synchronization and document store
- Diagnostics: the first syntax error reported by the callisp reader
- Hover: builtin and special form signatures, locally defined symbols
- Completion: locals, builtins, special forms
- Signature Help: for known builtins and special forms
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from callisp import __version__
from callisp_lsp.indexer import (
    BUILTIN_SIGNATURES,
    SPECIAL_FORM_SIGNATURES,
    DocumentIndex,
    build_index,
)

SOURCE = "callisp-ls"
SIGNATURES: Dict[str, str] = {**SPECIAL_FORM_SIGNATURES, **BUILTIN_SIGNATURES}
WORD_BREAKS = " \t()'\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class CallispLanguageServer(LanguageServer):
    CMD_NAME = "callisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self.publish_diagnostics(uri, diagnostics(state.index))
        return state


ls = CallispLanguageServer()


# --- Pure helpers (no server state) ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    if idx.error is None:
        return []
    return [
        Diagnostic(
            range=_mk_range(idx.error.line, idx.error.col),
            message=idx.error.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        )
    ]


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in SIGNATURES:
        return SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{word} : {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig)
        for name, sig in SPECIAL_FORM_SIGNATURES.items()
    ]
    items.extend(
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig)
        for name, sig in BUILTIN_SIGNATURES.items()
    )
    items.extend(
        CompletionItem(
            label=name,
            kind=CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable,
        )
        for name, sdef in idx.symbols.items()
    )
    return items


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


def signature_help(callee: str) -> Optional[SignatureHelp]:
    sig = SIGNATURES.get(callee)
    if not sig:
        return None
    # "(name a b)" -> parameters a, b
    params_list = sig.strip("()").split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]
    return SignatureHelp(
        signatures=[SignatureInformation(label=sig, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # first token after the last '('
    lp = prefix.rfind("(")
    if lp == -1:
        return None
    parts = prefix[lp + 1:].split()
    return parts[0].rstrip(")") if parts else None


def get_line_prefix(text: str, pos: Position) -> str:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    ls.update_document(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # the workspace has already applied the changes to its copy
    document = ls.workspace.get_text_document(uri)
    ls.update_document(uri, document.source)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _state(params) -> Optional[DocumentState]:
    # requests may arrive for documents that were never opened
    return ls.documents.get(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = _state(params)
    word = extract_word_at(state.text, params.position) if state else None
    contents = hover_text(word, state.index) if word else None
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = _state(params)
    return CompletionList(is_incomplete=False, items=completion_items(state.index) if state else [])


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = _state(params)
    callee = extract_callee_name(get_line_prefix(state.text, params.position)) if state else None
    return signature_help(callee) if callee else None


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = _state(params)
    return document_symbols(state.index) if state else None


def main():
    # stdio transport, as editors launch it
    ls.start_io()


if __name__ == "__main__":
    main()
