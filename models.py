"""
Tipos compartidos entre admin y cliente de Mercado Fácil.

Los documentos del document store no tienen schema: estas declaraciones
describen la forma acordada por convención a nivel de aplicación. Los campos
marcados como "compatibilidad" son legacy y se mantienen para no romper
clientes viejos.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Literal, Optional, TypedDict, TypeVar, Union

T = TypeVar("T")


# ===== USUARIOS / CLIENTES =====


class _UserBase(TypedDict):
    id: str
    nome: str
    email: str
    telefone: str
    dataCadastro: datetime
    cadastroCompleto: bool
    ativo: bool


class User(_UserBase, total=False):
    ultimoLogin: datetime
    enderecos: List["Endereco"]
    updatedAt: datetime
    # Compatibilidad: alias de telefone
    whatsapp: str


# Alias para compatibilidad
Cliente = User
Usuario = User


# ===== PRODUCTOS =====


class _ProdutoBase(TypedDict):
    id: str
    nome: str
    preco: float
    categoria: str
    disponivel: bool
    ativo: bool
    estoque: int


class Produto(_ProdutoBase, total=False):
    descricao: str
    codigoBarras: str
    custo: float
    imagemUrl: str
    imagens: List[str]
    destaque: bool
    tipoUnidade: str
    unidadeMedida: str
    avaliacoes: List[float]
    tags: List[str]
    promocaoAtiva: bool
    promocaoDataInicio: datetime
    promocaoDataFinal: datetime
    precoPromocional: float
    # Compatibilidad
    promo_price: float
    promo_price_per_100g: float
    promo_status: str
    unit_type: str
    createdAt: datetime
    updatedAt: datetime


Product = Produto


# ===== CATEGORÍAS =====


class _CategoriaBase(TypedDict):
    id: str
    nome: str


class Categoria(_CategoriaBase, total=False):
    descricao: str
    icone: str
    cor: str
    ordem: int
    ativa: bool
    createdAt: datetime
    updatedAt: datetime


Category = Categoria


# ===== ENDEREÇOS =====


class _EnderecoBase(TypedDict):
    id: str
    userId: str  # Normalizado: siempre userId
    cep: str
    logradouro: str
    numero: str
    bairro: str
    cidade: str
    estado: str
    principal: bool


class Endereco(_EnderecoBase, total=False):
    complemento: str
    updatedAt: datetime
    # Deprecated: usar userId
    clienteId: str
    usuarioId: str


# ===== CARRITO =====


class _CarrinhoItemBase(TypedDict):
    id: str
    name: str
    price: float
    qty: int


class CarrinhoItem(_CarrinhoItemBase, total=False):
    barcode: str
    category: str
    # Compatibilidad
    produto: Produto
    quantidade: int
    subtotal: float


CartItem = CarrinhoItem


# ===== PEDIDOS =====

PedidoStatus = Literal[
    "pendente",
    "confirmado",
    "preparando",
    "saiu_entrega",
    "entregue",
    "cancelado",
]


class _PedidoBase(TypedDict):
    id: str
    userId: str  # Normalizado: siempre userId
    itens: List[CarrinhoItem]
    total: float
    status: PedidoStatus
    endereco: Endereco
    dataPedido: datetime
    metodoPagamento: str


class Pedido(_PedidoBase, total=False):
    dataEntrega: datetime
    observacoes: str
    updatedAt: datetime
    # Deprecated: usar userId
    clienteId: str
    usuarioId: str


Order = Pedido


# ===== NOTIFICACIONES =====

TipoNotificacao = Literal["promocao", "pedido", "sistema", "oferta"]


class _NotificacaoBase(TypedDict):
    id: str
    title: str
    body: str
    timestamp: datetime
    read: bool
    type: TipoNotificacao


class Notificacao(_NotificacaoBase, total=False):
    data: Dict[str, Any]
    userId: str


# ===== DASHBOARD =====


class DashboardStats(TypedDict):
    totalClientes: int
    totalProdutos: int
    totalPedidos: int
    totalVendas: float
    pedidosPendentes: int
    produtosSemEstoque: int


# ===== PAGINACIÓN =====


class PageMeta(TypedDict):
    total: int
    page: int
    page_size: int
    pages: int


class DataPage(TypedDict, Generic[T]):
    items: List[T]
    meta: PageMeta


# ===== FORMULARIOS =====


class _ProdutoFormBase(TypedDict):
    nome: str
    descricao: str
    codigoBarras: str
    preco: float
    custo: float
    imagemUrl: str
    imagens: List[str]
    categoria: str
    destaque: bool
    disponivel: bool
    ativo: bool
    estoque: int
    tipoUnidade: str
    tags: List[str]
    promocaoAtiva: bool


class ProdutoForm(_ProdutoFormBase, total=False):
    promocaoDataInicio: str
    promocaoDataFinal: str
    precoPromocional: float


class CategoriaForm(TypedDict):
    nome: str
    descricao: str
    ativa: bool
    ordem: int


class _NotificacaoFormBase(TypedDict):
    title: str
    body: str
    type: TipoNotificacao
    sendToAll: bool


class NotificacaoForm(_NotificacaoFormBase, total=False):
    targetUsers: List[str]
    data: Dict[str, Any]


# ===== UTILITARIOS =====

DeliveryMode = Literal["pickup", "delivery"]


class PaymentMethod(TypedDict):
    id: str
    name: str
    description: str
    icon: str


class CustomerAddress(TypedDict):
    street: str
    number: str
    complement: str
    neighborhood: str
    city: str
    state: str
    zipCode: str


class _CustomerDataBase(TypedDict):
    name: str
    phone: str


class CustomerData(_CustomerDataBase, total=False):
    address: CustomerAddress


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LogContext(TypedDict, total=False):
    """Contexto opcional que acompaña cada entrada de log."""

    userId: str
    sessionId: str
    feature: str
    action: str
    metadata: Dict[str, Any]
    search: str
    count: int
    total: int
    error: str
    host: str
    query: str
    success: bool
    message: str
    synced: Union[int, bool]
    errors: List[Any]
    database: str
    paramsCount: int
    status: Any
    firebase: int
    page: int
    items_count: int
    source: str


# ===== FORMAS LEGACY (solo migración) =====


class LegacyCliente(TypedDict, total=False):
    """Documento de la colección 'clientes' antes de migrar a 'users'."""

    nome: str
    email: str
    telefone: Optional[str]
    whatsapp: Optional[str]


class LegacyOwnedRecord(TypedDict, total=False):
    """Pedido o endereço que puede tener el dueño bajo cualquiera de los tres nombres."""

    userId: Optional[str]
    clienteId: Optional[str]
    usuarioId: Optional[str]
